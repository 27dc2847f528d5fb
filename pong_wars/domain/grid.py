"""Square territory grid: every cell belongs to exactly one of two labels.

Cells are stored in a numpy array indexed ``[y, x]`` so that the array can be
handed to matplotlib unchanged. The grid is the single source of truth for
territory ownership; it is only relabeled, never resized.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class Territory(IntEnum):
    """Territory label of a grid cell."""

    A = 0
    B = 1

    @property
    def opponent(self) -> Territory:
        return Territory.B if self is Territory.A else Territory.A


class OutOfBoundsError(IndexError):
    """Raised for grid access outside ``[0, dimension - 1]``."""


@dataclass
class Grid:
    """N x N occupancy map of territory labels."""

    dimension: int
    cells: np.ndarray  # (N, N) uint8, [y, x] -> Territory value

    @classmethod
    def create(cls, dimension: int) -> Grid:
        """Left half (x < N // 2) is territory A, the rest territory B."""
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        cells = np.full((dimension, dimension), Territory.B.value, dtype=np.uint8)
        cells[:, : dimension // 2] = Territory.A.value
        return cls(dimension=dimension, cells=cells)

    @classmethod
    def from_array(cls, cells: np.ndarray) -> Grid:
        """Build a grid from an explicit ``[y, x]`` label array."""
        arr = np.asarray(cells, dtype=np.uint8)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError("cells must be a square 2D array")
        if not np.isin(arr, (Territory.A.value, Territory.B.value)).all():
            raise ValueError("cells must only hold territory labels 0 or 1")
        return cls(dimension=int(arr.shape[0]), cells=arr.copy())

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.dimension and 0 <= y < self.dimension

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(
                f"Cell ({x}, {y}) outside grid of dimension {self.dimension}"
            )

    def get(self, x: int, y: int) -> Territory:
        self._require_in_bounds(x, y)
        return Territory(int(self.cells[y, x]))

    def set(self, x: int, y: int, label: Territory) -> None:
        self._require_in_bounds(x, y)
        self.cells[y, x] = Territory(label).value

    def count(self, label: Territory) -> int:
        """Number of cells currently holding *label*."""
        return int(np.count_nonzero(self.cells == Territory(label).value))

    def to_array(self) -> np.ndarray:
        """Return a copy of the ``[y, x]`` label array."""
        return self.cells.copy()
