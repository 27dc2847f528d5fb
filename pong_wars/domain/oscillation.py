"""Cycle detection for the primary ball.

Once a ball has carved a hollow that returns it to an earlier position,
velocity and collision combination, it can bounce forever without claiming
new territory. The guard remembers the most recent collision states and, when
one repeats, flips one velocity component at random.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

from pong_wars.config.constants import HISTORY_CAPACITY
from pong_wars.domain.ball import Position, Velocity
from pong_wars.domain.collision import CollisionFlags

if TYPE_CHECKING:
    from pong_wars.simulation.random_source import RandomSource


def encode_state(position: Position, velocity: Velocity, flags: CollisionFlags) -> int:
    """Pack pre-collision position, velocity and flags into one integer.

    Layout: x in the highest byte, then y, dx, dy (two's complement bytes),
    with each raised flag added as a unit increment. Distinct states may
    share a code; the value is only used for membership tests.
    """
    state = (
        (position.x << 24)
        + (position.y << 16)
        + ((velocity.dx & 0xFF) << 8)
        + (velocity.dy & 0xFF)
    )
    return state + int(flags.x) + int(flags.y) + int(flags.corner)


def perturb(velocity: Velocity, rng: RandomSource) -> Velocity:
    """Flip exactly one component, dx or dy with equal probability."""
    return velocity.flip_x() if rng.chance(0.5) else velocity.flip_y()


class OscillationGuard:
    """Bounded history of encoded collision states with cycle breaking."""

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._history: deque[int] = deque(maxlen=capacity)
        self.perturbations = 0

    @property
    def history(self) -> tuple[int, ...]:
        """Encoded states, oldest first."""
        return tuple(self._history)

    def __contains__(self, state: object) -> bool:
        return state in self._history

    def __len__(self) -> int:
        return len(self._history)

    def observe(self, state: int) -> bool:
        """Record *state*; return True if it was already in the history."""
        seen = state in self._history
        self._history.append(state)
        return seen

    def apply(
        self,
        position: Position,
        velocity: Velocity,
        flags: CollisionFlags,
        new_velocity: Velocity,
        rng: RandomSource,
    ) -> tuple[Velocity, bool]:
        """Return the velocity to commit and whether it was perturbed.

        *position* and *velocity* are the pre-collision values; *new_velocity*
        is the resolver's result. Ticks without a velocity change pass through
        untouched and are not recorded.
        """
        if new_velocity == velocity:
            return new_velocity, False
        if self.observe(encode_state(position, velocity, flags)):
            self.perturbations += 1
            return perturb(new_velocity, rng), True
        return new_velocity, False
