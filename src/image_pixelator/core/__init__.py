"""
Tiled reveal core: geometry, pixel buffers, ordering, scheduling and the engine.

Nothing in this package depends on Qt, so it can drive any host that can
schedule delayed callbacks.
"""

from .engine import (
    RevealConfig,
    RunHandle,
    RunKind,
    RunState,
    TiledRevealEngine,
)
from .errors import (
    GeometryMismatch,
    InvalidConfiguration,
    NotInitialized,
    PixelatorError,
)
from .geometry import TileRect, covering_tile_rect, tile_rect
from .ordering import visitation_order
from .pixels import TRANSPARENT, PixelBuffer
from .scheduling import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    # Engine
    "TiledRevealEngine",
    "RevealConfig",
    "RunHandle",
    "RunKind",
    "RunState",
    # Errors
    "PixelatorError",
    "InvalidConfiguration",
    "NotInitialized",
    "GeometryMismatch",
    # Building blocks
    "PixelBuffer",
    "TRANSPARENT",
    "TileRect",
    "tile_rect",
    "covering_tile_rect",
    "visitation_order",
    # Schedulers
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
]
