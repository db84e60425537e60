"""
Utility helpers for image_pixelator.
"""

from .logging_config import setup_logging

__all__ = ["setup_logging"]
