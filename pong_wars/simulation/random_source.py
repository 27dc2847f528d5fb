"""Injectable randomness for spawning and cycle breaking.

Every random draw in the engine goes through a ``RandomSource`` so that runs
are reproducible from a seed and tests can script exact sequences.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from random import Random
from typing import Protocol


class RandomSource(Protocol):
    """Minimal random interface consumed by the engine."""

    def chance(self, p: float) -> bool:
        """Return True with probability *p*."""
        ...

    def randrange(self, lo: int, hi: int) -> int:
        """Return an integer in the half-open range ``[lo, hi)``."""
        ...


class SeededRandom:
    """``RandomSource`` backed by :class:`random.Random`."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._random = Random(seed)

    def chance(self, p: float) -> bool:
        if p <= 0:
            return False
        if p >= 1:
            return True
        return self._random.random() < p

    def randrange(self, lo: int, hi: int) -> int:
        if hi <= lo:
            raise ValueError("randrange requires lo < hi")
        return self._random.randrange(lo, hi)


class ScriptedRandom:
    """``RandomSource`` replaying fixed answers, for deterministic tests.

    Coin flips and range draws are consumed from separate queues. When a
    queue runs dry the fallback answer is used: ``True`` for coins and the
    lower bound for ranges.
    """

    def __init__(
        self,
        coins: Iterable[bool] = (),
        ranges: Iterable[int] = (),
    ) -> None:
        self._coins: deque[bool] = deque(coins)
        self._ranges: deque[int] = deque(ranges)
        self.coin_calls = 0
        self.range_calls = 0

    def chance(self, p: float) -> bool:
        self.coin_calls += 1
        if self._coins:
            return self._coins.popleft()
        return True

    def randrange(self, lo: int, hi: int) -> int:
        self.range_calls += 1
        if not self._ranges:
            return lo
        value = self._ranges.popleft()
        if not lo <= value < hi:
            raise ValueError(f"scripted value {value} outside [{lo}, {hi})")
        return value
