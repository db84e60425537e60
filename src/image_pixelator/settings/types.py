"""
Settings exceptions and result types for image_pixelator.
"""

from dataclasses import dataclass
from typing import List


class ConfigError(Exception):
    """Raised when the settings store cannot be read or written."""


@dataclass
class ValidationResult:
    """Outcome of SettingsValidator.validate()."""

    is_valid: bool
    errors: List[str]
    warnings: List[str]
