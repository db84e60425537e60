"""
Settings validation system for image_pixelator.
"""

import logging
import math
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        pixelator = self.settings.pixelator

        # Grid shape
        if pixelator.rows < 1:
            errors.append(f"Rows must be at least 1: {pixelator.rows}")
        if pixelator.columns < 1:
            errors.append(f"Columns must be at least 1: {pixelator.columns}")

        # Timing
        delay = pixelator.delay_between_parts
        if not math.isfinite(delay):
            errors.append(f"Delay between parts must be a finite number: {delay}")
        elif delay < 0:
            errors.append(f"Delay between parts must not be negative: {delay}")
        elif delay == 0:
            warnings.append("Delay between parts is 0, runs finish almost instantly")

        # Logging
        level = self.settings.logging.console_log_level.upper()
        if level not in VALID_LEVELS:
            warnings.append(f"Unknown console log level: {level}")

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
