"""Tile geometry for the reveal grid.

The grid is never stored: every rectangle is derived from the grid shape
and the image size on demand.
"""

import math
from dataclasses import dataclass
from typing import Iterator

from .errors import GeometryMismatch, InvalidConfiguration


@dataclass(frozen=True)
class TileRect:
    """Pixel rectangle of a single tile (top-left origin)."""

    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Pillow style box: (left, upper, right, lower)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def validate_grid(rows: int, columns: int) -> None:
    """Check that a grid shape is usable.

    Raises:
        InvalidConfiguration: If rows or columns is not an integer >= 1
    """
    for name, value in (("rows", rows), ("columns", columns)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidConfiguration(f"{name} must be >= 1, got {value}")


def validate_delay(delay: float) -> None:
    """Check that a per-step delay is a finite, non-negative number."""
    if isinstance(delay, bool) or not isinstance(delay, (int, float)):
        raise InvalidConfiguration(f"delay must be a number, got {delay!r}")
    if not math.isfinite(delay):
        raise InvalidConfiguration(f"delay must be finite, got {delay}")
    if delay < 0:
        raise InvalidConfiguration(f"delay must be >= 0, got {delay}")


def tile_size(columns: int, rows: int, width: int, height: int) -> tuple[int, int]:
    """Get (tile_width, tile_height) using integer division."""
    return width // columns, height // rows


def tile_rect(index: int, rows: int, columns: int, width: int, height: int) -> TileRect:
    """Rectangle of tile ``index`` in a ``rows x columns`` grid.

    Remainder pixels on the right and bottom edges (when the image size is
    not divisible by the grid) belong to no tile.

    Args:
        index: Tile index in [0, rows * columns)
        rows: Number of grid rows
        columns: Number of grid columns
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        TileRect for the tile
    """
    if not 0 <= index < rows * columns:
        raise IndexError(f"Tile index {index} out of range for {rows}x{columns} grid")

    row, col = divmod(index, columns)
    w, h = tile_size(columns, rows, width, height)
    return TileRect(x=col * w, y=row * h, width=w, height=h)


def covering_tile_rect(
    index: int, rows: int, columns: int, width: int, height: int
) -> TileRect:
    """Like tile_rect(), but the last column and row extend to the image edge.

    With this variant the tiles partition the image exactly, so no
    remainder strip is left behind by a hide run.
    """
    rect = tile_rect(index, rows, columns, width, height)
    row, col = divmod(index, columns)

    w = width - rect.x if col == columns - 1 else rect.width
    h = height - rect.y if row == rows - 1 else rect.height
    return TileRect(x=rect.x, y=rect.y, width=w, height=h)


def check_grid_fits(rows: int, columns: int, width: int, height: int) -> None:
    """Ensure every tile of the grid covers at least one pixel.

    Raises:
        GeometryMismatch: If the grid is finer than the image
    """
    if columns > width or rows > height:
        raise GeometryMismatch(
            f"Grid {rows}x{columns} is finer than image {width}x{height}"
        )


def iter_tile_rects(
    rows: int, columns: int, width: int, height: int, absorb_remainder: bool = False
) -> Iterator[TileRect]:
    """Yield the rectangles of all tiles in index order."""
    rect_fn = covering_tile_rect if absorb_remainder else tile_rect
    for index in range(rows * columns):
        yield rect_fn(index, rows, columns, width, height)
