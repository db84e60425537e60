"""Image loading helpers for the demo host."""

import logging
from pathlib import Path
from typing import Union

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> Image.Image:
    """Load an image file as RGBA.

    Raises:
        OSError: If the file cannot be opened or decoded
    """
    with Image.open(path) as image:
        image.load()
        rgba = image.convert("RGBA")
    logger.debug(f"Loaded {Path(path).name}: {rgba.width}x{rgba.height}")
    return rgba


def make_test_card(width: int = 256, height: int = 256, cells: int = 8) -> Image.Image:
    """Generate a colourful checker test card.

    Every cell has a distinct colour so tile boundaries are easy to see.
    """
    image = Image.new("RGBA", (width, height), (0, 0, 0, 255))
    draw = ImageDraw.Draw(image)

    cell_w = max(1, width // cells)
    cell_h = max(1, height // cells)
    for row in range(cells):
        for col in range(cells):
            r = int(255 * col / max(1, cells - 1))
            g = int(255 * row / max(1, cells - 1))
            b = 255 if (row + col) % 2 == 0 else 96
            x0, y0 = col * cell_w, row * cell_h
            draw.rectangle((x0, y0, x0 + cell_w - 1, y0 + cell_h - 1), fill=(r, g, b, 255))

    return image
