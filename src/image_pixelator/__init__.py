"""
image_pixelator: progressively hide or reveal an image tile by tile.

The image is split into a rows x columns grid whose tiles are switched
between fully transparent and original pixels in random order, with a
fixed delay between steps. The original image is restored whenever an
effect is interrupted or the host goes away.
"""

__version__ = "0.1.0"
__author__ = "image_pixelator Contributors"

from .core import (
    TiledRevealEngine,
    RevealConfig,
    RunHandle,
    RunKind,
    RunState,
    PixelBuffer,
    TileRect,
    tile_rect,
    covering_tile_rect,
    visitation_order,
    ManualScheduler,
    AsyncioScheduler,
    PixelatorError,
    InvalidConfiguration,
    NotInitialized,
    GeometryMismatch,
)

__all__ = [
    # Engine
    "TiledRevealEngine",
    "RevealConfig",
    "RunHandle",
    "RunKind",
    "RunState",
    # Building blocks
    "PixelBuffer",
    "TileRect",
    "tile_rect",
    "covering_tile_rect",
    "visitation_order",
    # Schedulers
    "ManualScheduler",
    "AsyncioScheduler",
    # Errors
    "PixelatorError",
    "InvalidConfiguration",
    "NotInitialized",
    "GeometryMismatch",
]
