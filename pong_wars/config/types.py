"""Configuration dataclasses for simulation runs.

All frozen dataclasses that parameterise one simulation, its palette and a
persisted batch run live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pong_wars.config.constants import (
    COLOR_A,
    COLOR_B,
    GRID_DIMENSION,
    HISTORY_CAPACITY,
    MIN_GRID_DIMENSION,
    NUM_TICKS,
)
from pong_wars.domain.color import Color
from pong_wars.domain.grid import Territory

__all__ = [
    "Palette",
    "RunConfig",
    "SimulationConfig",
]


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Palette:
    """Territory colors; each ball is drawn in its opponent's color."""

    color_a: Color = field(default_factory=lambda: Color(*COLOR_A))
    color_b: Color = field(default_factory=lambda: Color(*COLOR_B))

    def territory_color(self, label: Territory) -> Color:
        return self.color_a if label == Territory.A else self.color_b

    def ball_color(self, ball_index: int) -> Color:
        """Fill color of a ball: the color of the territory it bounces off."""
        return self.color_b if ball_index == 0 else self.color_a

    def empty_color(self, ball_index: int) -> Color:
        """Color left behind by a ball: its own territory color."""
        return self.color_a if ball_index == 0 else self.color_b


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationConfig:
    """Engine-level knobs threaded into one simulation instance."""

    dimension: int = GRID_DIMENSION
    history_capacity: int = HISTORY_CAPACITY
    palette: Palette = field(default_factory=Palette)

    def __post_init__(self) -> None:
        if self.dimension < MIN_GRID_DIMENSION:
            raise ValueError(f"dimension must be >= {MIN_GRID_DIMENSION}")
        if self.history_capacity < 1:
            raise ValueError("history_capacity must be >= 1")


@dataclass(frozen=True)
class RunConfig:
    """Batch-run parameters: how long to run and where to persist logs."""

    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    ticks: int = NUM_TICKS
    seed: int = 0
    out_dir: Path = Path("data")
    frame_delay_s: float = 0.0
    write_logs: bool = True

    def __post_init__(self) -> None:
        if self.ticks < 1:
            raise ValueError("ticks must be >= 1")
        if self.frame_delay_s < 0:
            raise ValueError("frame_delay_s must be >= 0")
