"""
Grid and timing settings for the tiled reveal effect.
"""

import logging
import math
from typing import TYPE_CHECKING, Optional, cast

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

MAX_GRID = 256
MAX_DELAY = 60.0


class PixelatorSettings:
    """Manages rows, columns and delay of the reveal effect."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    def _get_int(self, key: str, default: int = 0) -> int:
        """Type-safe integer retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            return default

    def _get_float(self, key: str, default: float = 0.0) -> float:
        """Type-safe float retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            if value is None:
                return default
            return float(cast(str | float, value))
        except (ValueError, TypeError):
            return default

    @property
    def rows(self) -> int:
        """Get number of grid rows."""
        return self._get_int("pixelator/rows", 4)

    @rows.setter
    def rows(self, value: int) -> None:
        """Set number of grid rows (1-256)."""
        if 1 <= value <= MAX_GRID:
            self.settings.setValue("pixelator/rows", value)
            self.settings.sync()
        else:
            logger.warning(f"Invalid rows: {value}, keeping current: {self.rows}")

    @property
    def columns(self) -> int:
        """Get number of grid columns."""
        return self._get_int("pixelator/columns", 4)

    @columns.setter
    def columns(self, value: int) -> None:
        """Set number of grid columns (1-256)."""
        if 1 <= value <= MAX_GRID:
            self.settings.setValue("pixelator/columns", value)
            self.settings.sync()
        else:
            logger.warning(
                f"Invalid columns: {value}, keeping current: {self.columns}"
            )

    @property
    def delay_between_parts(self) -> float:
        """Get delay between tiles in seconds."""
        return self._get_float("pixelator/delay_between_parts", 0.5)

    @delay_between_parts.setter
    def delay_between_parts(self, value: float) -> None:
        """Set delay between tiles in seconds (0-60 s)."""
        value = float(value)
        if math.isnan(value):
            logger.warning("Delay between parts cannot be NaN, keeping current value")
            return
        validated = max(0.0, min(MAX_DELAY, value))
        self.settings.setValue("pixelator/delay_between_parts", validated)
        self.settings.sync()

    @property
    def absorb_remainder(self) -> bool:
        """Whether edge tiles extend over pixels left by integer division."""
        return self._get_bool("pixelator/absorb_remainder", True)

    @absorb_remainder.setter
    def absorb_remainder(self, value: bool) -> None:
        self.settings.setValue("pixelator/absorb_remainder", value)
        self.settings.sync()

    @property
    def seed(self) -> Optional[int]:
        """Fixed random seed for tile order, or None for a fresh order each start."""
        value = self.settings.value("pixelator/seed", None)
        if value in (None, ""):
            return None
        try:
            return int(cast(str | int, value))
        except (ValueError, TypeError):
            logger.warning(f"Ignoring invalid seed value: {value!r}")
            return None

    @seed.setter
    def seed(self, value: Optional[int]) -> None:
        if value is None:
            self.settings.remove("pixelator/seed")
        else:
            self.settings.setValue("pixelator/seed", int(value))
        self.settings.sync()
