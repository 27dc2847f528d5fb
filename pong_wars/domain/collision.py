"""Per-tick collision resolution of one ball against the territory grid.

Axis rules are evaluated in a fixed order: x, then y, then the corner rule.
The corner rule only fires when neither axis rule changed the velocity, so a
velocity component is negated at most once per tick. Every obstacle cell a
rule touches is claimed (relabeled to the ball's passable territory) before
the move is committed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pong_wars.domain.ball import Ball, Position, Velocity
from pong_wars.domain.grid import Grid, Territory


@dataclass(frozen=True)
class CollisionFlags:
    """Which rules fired for one ball on one tick."""

    x: bool = False
    y: bool = False
    corner: bool = False

    @property
    def any(self) -> bool:
        return self.x or self.y or self.corner


@dataclass(frozen=True)
class CellClaim:
    """A cell relabeled to ``label`` by a collision."""

    x: int
    y: int
    label: Territory


@dataclass(frozen=True)
class CollisionOutcome:
    """Resolver result; the move itself is committed by the tick driver."""

    velocity: Velocity
    flags: CollisionFlags
    claims: tuple[CellClaim, ...] = field(default_factory=tuple)


def _blocked(grid: Grid, x: int, y: int, obstacle: Territory) -> bool:
    return grid.get(x, y) == obstacle


def resolve_collision(
    grid: Grid,
    ball: Ball,
    passable: Territory | None = None,
    obstacle: Territory | None = None,
) -> CollisionOutcome:
    """Compute *ball*'s velocity for this tick, claiming cells it bounces off.

    Mutates *grid* for every claimed cell. Does not move the ball.
    """
    passable = ball.passable if passable is None else passable
    obstacle = ball.obstacle if obstacle is None else obstacle

    pos = ball.position
    vel = ball.velocity
    candidate = pos + vel
    x_valid = 0 <= candidate.x < grid.dimension
    y_valid = 0 <= candidate.y < grid.dimension

    new_vel = vel
    claims: list[CellClaim] = []
    x_hit = y_hit = corner_hit = False

    if not x_valid or _blocked(grid, candidate.x, pos.y, obstacle):
        x_hit = True
        new_vel = new_vel.flip_x()
        if x_valid:
            grid.set(candidate.x, pos.y, passable)
            claims.append(CellClaim(candidate.x, pos.y, passable))

    if not y_valid or _blocked(grid, pos.x, candidate.y, obstacle):
        y_hit = True
        new_vel = new_vel.flip_y()
        if y_valid:
            grid.set(pos.x, candidate.y, passable)
            claims.append(CellClaim(pos.x, candidate.y, passable))

    # Both candidates are in bounds here: an out-of-range axis always collides.
    if new_vel == vel and _blocked(grid, candidate.x, candidate.y, obstacle):
        corner_hit = True
        new_vel = vel.reversed()
        grid.set(candidate.x, candidate.y, passable)
        claims.append(CellClaim(candidate.x, candidate.y, passable))

    return CollisionOutcome(
        velocity=new_vel,
        flags=CollisionFlags(x=x_hit, y=y_hit, corner=corner_hit),
        claims=tuple(claims),
    )


def can_occupy(grid: Grid, position: Position, obstacle: Territory) -> bool:
    """Whether a ball whose obstacle is *obstacle* may move onto *position*."""
    if not grid.in_bounds(position.x, position.y):
        return False
    return grid.get(position.x, position.y) != obstacle
