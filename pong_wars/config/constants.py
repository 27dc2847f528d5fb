"""Centralized domain constants for territory simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_DIMENSION = 32
"""Default grid side length in cells (the LED matrix is 32x32)."""

MIN_GRID_DIMENSION = 2
"""Smallest grid that still holds both territories."""

NUM_BALLS = 2
"""Number of balls; ball 0 is the primary ball."""

PRIMARY_BALL = 0
"""Index of the only ball instrumented by the oscillation guard."""

HISTORY_CAPACITY = 8
"""Number of encoded collision states kept for cycle detection."""

NUM_TICKS = 1_000
"""Default number of ticks for a batch run."""

COLOR_A: tuple[int, int, int] = (255, 50, 50)
"""Territory color of label A (ball 0's free space)."""

COLOR_B: tuple[int, int, int] = (30, 255, 30)
"""Territory color of label B (ball 1's free space)."""

FLUSH_THRESHOLD = 8_192
"""Flush log rows to Parquet once this in-memory row count is reached."""

DEVICE_NAME_FRAGMENT = "IDM-"
"""Substring of the advertised local name identifying the pixel display."""

PIXEL_CHARACTERISTIC_UUID16 = 0xFA02
"""16-bit UUID of the display characteristic that accepts pixel commands."""
