"""Domain layer: grid, balls, collision rules and the oscillation guard."""

from pong_wars.domain.ball import Ball, Position, Velocity, spawn_ball, spawn_row_range
from pong_wars.domain.collision import (
    CellClaim,
    CollisionFlags,
    CollisionOutcome,
    can_occupy,
    resolve_collision,
)
from pong_wars.domain.color import Color
from pong_wars.domain.grid import Grid, OutOfBoundsError, Territory
from pong_wars.domain.oscillation import OscillationGuard, encode_state, perturb

__all__ = [
    "Ball",
    "CellClaim",
    "CollisionFlags",
    "CollisionOutcome",
    "Color",
    "Grid",
    "OscillationGuard",
    "OutOfBoundsError",
    "Position",
    "Territory",
    "Velocity",
    "can_occupy",
    "encode_state",
    "perturb",
    "resolve_collision",
    "spawn_ball",
    "spawn_row_range",
]
