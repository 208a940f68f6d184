"""CoordinateTransform - odd-row offset hex grid <-> pixel mapping."""
from __future__ import annotations

import math

from hexmap.types import Cell, Pixel


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class CoordinateTransform:
    """Maps (column, row) cells to pixel offsets from the map origin and back.

    Odd rows are shifted right by half a column, giving the brick pattern
    that lets hexagon sprites touch without gaps.

    Args:
        hex_width: Sprite width in pixels.
        hex_height: Sprite height in pixels.
        tile_offset: Column spacing as a fraction of ``hex_width``.
        row_spacing: Row spacing as a fraction of ``hex_height``.
    """

    def __init__(
        self,
        hex_width: float,
        hex_height: float,
        tile_offset: float = 0.75,
        row_spacing: float = 1.0,
    ) -> None:
        for name, value in (
            ("hex_width", hex_width),
            ("hex_height", hex_height),
            ("tile_offset", tile_offset),
            ("row_spacing", row_spacing),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        self._hex_width = hex_width
        self._hex_height = hex_height
        self._horiz = hex_width * tile_offset
        self._vert = hex_height * row_spacing

    @property
    def hex_width(self) -> float:
        return self._hex_width

    @property
    def hex_height(self) -> float:
        return self._hex_height

    @property
    def horiz_spacing(self) -> float:
        return self._horiz

    @property
    def vert_spacing(self) -> float:
        return self._vert

    def to_pixel(self, column: int, row: int) -> Pixel:
        x = column * self._horiz
        y = row * self._vert
        if row % 2 == 1:
            x += self._horiz / 2
        return (x, y)

    def to_grid(self, x: float, y: float) -> Cell:
        """Nearest cell to a pixel offset. Not clamped; see ``hit_test``."""
        row = _round_half_up(y / self._vert)
        if row % 2 == 1:
            x -= self._horiz / 2
        column = _round_half_up(x / self._horiz)
        return (column, row)

    def hit_test(
        self,
        x: float,
        y: float,
        width: int,
        height: int,
        origin: Pixel = (0.0, 0.0),
    ) -> Cell | None:
        """Cell under a screen position for a ``width`` x ``height`` map.

        Returns None when the position falls outside the grid.
        """
        column, row = self.to_grid(x - origin[0], y - origin[1])
        if 0 <= column < width and 0 <= row < height:
            return (column, row)
        return None
