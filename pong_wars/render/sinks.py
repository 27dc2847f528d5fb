"""Render sinks: consumers of the engine's ordered "set cell color" intents."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from pong_wars.domain.color import Color


@dataclass(frozen=True)
class RenderDelta:
    """One cell color write."""

    x: int
    y: int
    color: Color


class RenderSink(Protocol):
    """Best-effort display of one cell in one color."""

    def set_cell(self, x: int, y: int, color: Color) -> None: ...


@dataclass
class RecordingSink:
    """Keep every write in order."""

    deltas: list[RenderDelta] = field(default_factory=list)

    def set_cell(self, x: int, y: int, color: Color) -> None:
        self.deltas.append(RenderDelta(x, y, color))

    def clear(self) -> None:
        self.deltas.clear()


class FrameBufferSink:
    """Mirror writes into an ``(N, N, 3)`` uint8 RGB array indexed ``[y, x]``."""

    def __init__(self, dimension: int) -> None:
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension
        self.frame = np.zeros((dimension, dimension, 3), dtype=np.uint8)
        self.writes = 0

    def set_cell(self, x: int, y: int, color: Color) -> None:
        if not (0 <= x < self.dimension and 0 <= y < self.dimension):
            raise ValueError(f"Pixel ({x}, {y}) outside {self.dimension}x{self.dimension} frame")
        self.frame[y, x] = color.as_tuple()
        self.writes += 1


class FanOutSink:
    """Forward each write to several sinks in order."""

    def __init__(self, sinks: Iterable[RenderSink]) -> None:
        self.sinks = list(sinks)

    def set_cell(self, x: int, y: int, color: Color) -> None:
        for sink in self.sinks:
            sink.set_cell(x, y, color)
