"""RGB color value type shared by the palette and the render sinks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """One 24-bit RGB color."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError("color channels must be in [0, 255]")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)
