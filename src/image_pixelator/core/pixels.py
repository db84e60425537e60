"""Owned RGBA pixel buffers.

A PixelBuffer wraps a Pillow image in RGBA mode. Buffers never share
pixel storage with the caller: every image passed in or handed out is a copy.
"""

import logging
from typing import Optional

from PIL import Image

from .errors import GeometryMismatch
from .geometry import TileRect

logger = logging.getLogger(__name__)

# Fully transparent black, the "cleared" colour of a tile
TRANSPARENT = (0, 0, 0, 0)

PIXEL_MODE = "RGBA"


class PixelBuffer:
    """Width x height RGBA pixel buffer."""

    def __init__(self, image: Image.Image):
        """Wrap a defensive RGBA copy of ``image``."""
        if image.mode != PIXEL_MODE:
            logger.debug(f"Converting {image.mode} image to {PIXEL_MODE}")
            self._image = image.convert(PIXEL_MODE)
        else:
            self._image = image.copy()

    @classmethod
    def blank(cls, width: int, height: int) -> "PixelBuffer":
        """Create a fully transparent buffer."""
        return cls(Image.new(PIXEL_MODE, (width, height), TRANSPARENT))

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._image)

    def to_image(self) -> Image.Image:
        """Get a copy of the pixels as a Pillow image."""
        return self._image.copy()

    def tobytes(self) -> bytes:
        return self._image.tobytes()

    def getpixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        return self._image.getpixel((x, y))  # type: ignore[return-value]

    # === MUTATION ===

    def clear(self) -> None:
        """Make every pixel fully transparent."""
        self._image.paste(TRANSPARENT, (0, 0, self.width, self.height))

    def clear_region(self, rect: TileRect) -> None:
        """Make the pixels inside ``rect`` fully transparent."""
        if rect.is_empty():
            return
        self._image.paste(TRANSPARENT, rect.box)

    def copy_region_from(self, source: "PixelBuffer", rect: TileRect) -> None:
        """Copy the pixels inside ``rect`` from ``source`` into this buffer.

        Raises:
            GeometryMismatch: If the buffers differ in size
        """
        self._check_same_size(source)
        if rect.is_empty():
            return
        self._image.paste(source._image.crop(rect.box), rect.box)

    def copy_from(self, source: "PixelBuffer") -> None:
        """Overwrite every pixel with the pixels of ``source``.

        Raises:
            GeometryMismatch: If the buffers differ in size
        """
        self._check_same_size(source)
        self._image.paste(source._image, (0, 0))

    # === QUERIES ===

    def equals(self, other: Optional["PixelBuffer"]) -> bool:
        """Bit-for-bit equality of size and pixel data."""
        if other is None or other.size != self.size:
            return False
        return self._image.tobytes() == other._image.tobytes()

    def is_region_transparent(self, rect: TileRect) -> bool:
        """Check that every pixel inside ``rect`` has alpha 0."""
        if rect.is_empty():
            return True
        alpha = self._image.crop(rect.box).getchannel("A")
        return alpha.getextrema() == (0, 0)

    def is_transparent(self) -> bool:
        return self.is_region_transparent(TileRect(0, 0, self.width, self.height))

    def region_equals(self, other: "PixelBuffer", rect: TileRect) -> bool:
        """Bit-for-bit equality of the pixels inside ``rect``."""
        self._check_same_size(other)
        if rect.is_empty():
            return True
        return (
            self._image.crop(rect.box).tobytes()
            == other._image.crop(rect.box).tobytes()
        )

    def _check_same_size(self, other: "PixelBuffer") -> None:
        if other.size != self.size:
            raise GeometryMismatch(
                f"Buffer size {other.width}x{other.height} does not match "
                f"{self.width}x{self.height}"
            )

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
