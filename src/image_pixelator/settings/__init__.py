"""
Settings package for image_pixelator.

Type-safe configuration management on top of Qt's QSettings.

Usage:
    from image_pixelator.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
    config = settings.reveal_config()
"""

from .core import AppSettings, CONFIG_VERSION
from .types import ConfigError, ValidationResult
from .pixelator import PixelatorSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "CONFIG_VERSION",
    "ConfigError",
    "ValidationResult",
    "PixelatorSettings",
    "LoggingSettings",
]
