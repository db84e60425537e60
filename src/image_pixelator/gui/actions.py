"""Action handlers for MainWindow.

Keeps UI action logic separate from window construction/layout.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QDialog, QFileDialog, QMessageBox

from ..core import PixelatorError
from ..images import load_image
from .dialogs import GridSettingsDialog

if TYPE_CHECKING:
    from .main_window import MainWindow

IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp);;All Files (*)"


class MainWindowActions:
    """Handles actions and events for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        self.main_window = main_window
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def open_image(self) -> None:
        """Ask for an image file and show it."""
        mw = self.main_window
        file_path, _ = QFileDialog.getOpenFileName(
            mw, "Open Image", str(Path.cwd()), IMAGE_FILTER
        )
        if file_path:
            self.load_image_file(Path(file_path))

    def load_image_file(self, path: Path) -> bool:
        """Load ``path`` into the view. Returns True on success."""
        mw = self.main_window
        try:
            image = load_image(path)
        except OSError as e:
            self.logger.error(f"Could not open image {path}: {e}")
            QMessageBox.warning(mw, "Open Image", f"Could not open {path.name}:\n{e}")
            return False

        mw.image_view.set_image(image)
        mw.status_bar.showMessage(
            f"Loaded {path.name} ({image.width}x{image.height})", 5000
        )
        self.logger.info(f"Image loaded: {path}")
        return True

    def pixelate(self) -> None:
        """Start a hide run."""
        self._run_effect(self.main_window.image_view.pixelate_image, "Pixelating")

    def repixelate(self) -> None:
        """Start a reveal run."""
        self._run_effect(self.main_window.image_view.repixelate_image, "Re-pixelating")

    def restore(self) -> None:
        """Stop any run and restore the original image."""
        mw = self.main_window
        try:
            mw.image_view.restore_original_image()
        except PixelatorError as e:
            self._report_error("Restore", e)
            return
        mw.status_bar.showMessage("Original image restored", 3000)

    def grid_settings(self) -> None:
        """Show pixelation settings dialog."""
        mw = self.main_window
        dialog = GridSettingsDialog(mw.settings, mw)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            mw.apply_settings()
            mw.status_bar.showMessage("Pixelation settings updated", 3000)

    def _run_effect(self, start, label: str) -> None:
        mw = self.main_window
        try:
            handle = start()
        except PixelatorError as e:
            self._report_error(label, e)
            return
        mw.status_bar.showMessage(
            f"{label}: {handle.rows}x{handle.columns} tiles, {handle.delay}s each"
        )

    def _report_error(self, title: str, error: PixelatorError) -> None:
        self.logger.error(f"{title} failed: {error}")
        QMessageBox.warning(self.main_window, title, str(error))
