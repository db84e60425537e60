"""
Qt host bindings for the tiled reveal engine.
"""

from .qt_scheduler import QTimerScheduler
from .image_view import PixelatedImageView

__all__ = ["QTimerScheduler", "PixelatedImageView"]
