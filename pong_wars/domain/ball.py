"""Ball state: integer position plus a strictly diagonal unit velocity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pong_wars.domain.grid import Territory

if TYPE_CHECKING:
    from pong_wars.simulation.random_source import RandomSource


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def __add__(self, velocity: Velocity) -> Position:
        return Position(self.x + velocity.dx, self.y + velocity.dy)


@dataclass(frozen=True)
class Velocity:
    """Direction components, each -1 or +1."""

    dx: int
    dy: int

    def __post_init__(self) -> None:
        if self.dx not in (-1, 1) or self.dy not in (-1, 1):
            raise ValueError("velocity components must be -1 or +1")

    def flip_x(self) -> Velocity:
        return Velocity(-self.dx, self.dy)

    def flip_y(self) -> Velocity:
        return Velocity(self.dx, -self.dy)

    def reversed(self) -> Velocity:
        return Velocity(-self.dx, -self.dy)


@dataclass
class Ball:
    """One moving ball; mutated in place by the tick driver."""

    index: int
    position: Position
    velocity: Velocity

    @property
    def passable(self) -> Territory:
        """Label this ball moves through: A for ball 0, B for ball 1."""
        return Territory.A if self.index == 0 else Territory.B

    @property
    def obstacle(self) -> Territory:
        return self.passable.opponent


def random_direction(rng: RandomSource) -> int:
    return 1 if rng.chance(0.5) else -1


def spawn_row_range(dimension: int) -> tuple[int, int]:
    """Half-open row range balls spawn in: the band around the middle row."""
    lo = dimension // 2 - dimension // 3
    hi = dimension // 2 + dimension // 3
    return lo, max(hi, lo + 1)


def spawn_ball(index: int, dimension: int, rng: RandomSource) -> Ball:
    """Place ball 0 on the left edge and ball 1 on the right edge."""
    if index not in (0, 1):
        raise ValueError("ball index must be 0 or 1")
    lo, hi = spawn_row_range(dimension)
    x = 0 if index == 0 else dimension - 1
    y = rng.randrange(lo, hi)
    dx = random_direction(rng)
    dy = random_direction(rng)
    return Ball(index=index, position=Position(x, y), velocity=Velocity(dx, dy))
