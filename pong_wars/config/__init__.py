"""Configuration layer: constants and typed config dataclasses."""

from pong_wars.config.constants import (
    COLOR_A,
    COLOR_B,
    FLUSH_THRESHOLD,
    GRID_DIMENSION,
    HISTORY_CAPACITY,
    NUM_BALLS,
    NUM_TICKS,
    PRIMARY_BALL,
)
from pong_wars.config.types import Palette, RunConfig, SimulationConfig

__all__ = [
    "COLOR_A",
    "COLOR_B",
    "FLUSH_THRESHOLD",
    "GRID_DIMENSION",
    "HISTORY_CAPACITY",
    "NUM_BALLS",
    "NUM_TICKS",
    "PRIMARY_BALL",
    "Palette",
    "RunConfig",
    "SimulationConfig",
]
