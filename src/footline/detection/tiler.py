"""
Partitioning of an image into a grid of subimages.
"""

from dataclasses import dataclass
from typing import Iterator

from ..core.errors import ConfigurationError


@dataclass(frozen=True)
class Tile:
    """Half-open pixel rectangle [x0, x1) x [y0, y1) at grid cell (row, col)."""

    row: int
    col: int
    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return (self.x0, self.y0, self.x1, self.y1)


class SubimageTiler:
    """
    Splits an image into rows x cols non-overlapping tiles.

    Boundaries use integer division (W*j//cols), so tiles can differ in size
    by one pixel. Together they cover the image exactly.

    Usage:
        tiler = SubimageTiler(rows=2, cols=3)
        for tile in tiler.tiles(width, height):
            ...
    """

    def __init__(self, rows: int, cols: int):
        if rows <= 0 or cols <= 0:
            raise ConfigurationError(f"Tile grid must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols

    def tiles(self, width: int, height: int) -> Iterator[Tile]:
        """Yield tiles in row-major order."""
        for i in range(self.rows):
            y0 = height * i // self.rows
            y1 = height * (i + 1) // self.rows
            for j in range(self.cols):
                x0 = width * j // self.cols
                x1 = width * (j + 1) // self.cols
                yield Tile(i, j, x0, y0, x1, y1)
