"""
Dialogs for image_pixelator.
"""

from .grid_settings_dialog import GridSettingsDialog

__all__ = ["GridSettingsDialog"]
