"""
Core settings management for image_pixelator.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from ..core.engine import RevealConfig
from .types import ConfigError, ValidationResult
from .validation import SettingsValidator
from .pixelator import PixelatorSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

# Stored under app/version; bump when stored keys change meaning
CONFIG_VERSION = "1.0"


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Explicit ini file to use instead of the platform store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("image_pixelator", "image_pixelator")
        self.profile = profile

        # Use profile as a group to create hierarchy: image_pixelator/default/...
        self.settings.beginGroup(profile)

        # Initialize subsystems
        self._validator = SettingsValidator(self)
        self._pixelator = PixelatorSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def pixelator(self) -> PixelatorSettings:
        """Access grid and timing settings subsystem."""
        return self._pixelator

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION AND FIRST RUN ===

    def _ensure_version(self) -> None:
        """Write the configuration version on first run."""
        current_version = str(self.settings.value("app/version", ""))
        if not current_version:
            self.settings.setValue("app/version", CONFIG_VERSION)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != CONFIG_VERSION:
            logger.warning(
                f"Unknown configuration version {current_version}, "
                f"expected {CONFIG_VERSION}"
            )

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the application."""
        value = self.settings.value("app/first_run", True)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", CONFIG_VERSION)
        return str(value) if value is not None else CONFIG_VERSION

    # === PIXELATOR SETTINGS (DELEGATED) ===

    @property
    def rows(self) -> int:
        """Get number of grid rows."""
        return self._pixelator.rows

    @rows.setter
    def rows(self, value: int) -> None:
        """Set number of grid rows."""
        self._pixelator.rows = value

    @property
    def columns(self) -> int:
        """Get number of grid columns."""
        return self._pixelator.columns

    @columns.setter
    def columns(self, value: int) -> None:
        """Set number of grid columns."""
        self._pixelator.columns = value

    @property
    def delay_between_parts(self) -> float:
        """Get delay between tiles in seconds."""
        return self._pixelator.delay_between_parts

    @delay_between_parts.setter
    def delay_between_parts(self, value: float) -> None:
        """Set delay between tiles in seconds."""
        self._pixelator.delay_between_parts = value

    def reveal_config(self) -> RevealConfig:
        """Build an engine configuration from the stored values."""
        return RevealConfig(
            rows=self._pixelator.rows,
            columns=self._pixelator.columns,
            delay_between_parts=self._pixelator.delay_between_parts,
            absorb_remainder=self._pixelator.absorb_remainder,
        )

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path."""
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        """Set log file path."""
        self._logging.log_file_path = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage.

        Raises:
            ConfigError: If the settings storage cannot be written or parsed
        """
        self.settings.sync()
        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise ConfigError(
                f"Could not sync settings to {self.settings.fileName()}: {status.name}"
            )
