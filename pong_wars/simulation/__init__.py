"""Simulation engine: tick driver, random sources and Parquet persistence."""

from pong_wars.simulation.engine import (
    BallUpdate,
    RunSummary,
    Simulation,
    TickReport,
    run_simulation,
)
from pong_wars.simulation.persistence import ParquetLog
from pong_wars.simulation.random_source import RandomSource, ScriptedRandom, SeededRandom

__all__ = [
    "BallUpdate",
    "ParquetLog",
    "RandomSource",
    "RunSummary",
    "ScriptedRandom",
    "SeededRandom",
    "Simulation",
    "TickReport",
    "run_simulation",
]
