"""
Main application window for image_pixelator.
"""

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtGui import QAction, QCloseEvent

from ..core import RunHandle, RunState
from ..images import make_test_card
from ..settings import AppSettings
from .actions import MainWindowActions
from .image_view import PixelatedImageView
from .menu import MenuBuilder


class MainWindow(QMainWindow):
    """Main application window: an image view with effect controls."""

    # Menu actions (created by MenuBuilder)
    action_open: QAction
    action_exit: QAction
    action_pixelate: QAction
    action_repixelate: QAction
    action_restore: QAction
    action_grid_settings: QAction

    def __init__(
        self,
        settings: AppSettings,
        image_path: Optional[Path] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.setObjectName("main_window")
        self.settings = settings

        self.image_view = PixelatedImageView(
            config=settings.reveal_config(), seed=settings.pixelator.seed
        )
        self.image_view.run_finished.connect(self._on_run_finished)

        self.main_window_actions = MainWindowActions(self)
        self.menu_builder = MenuBuilder(self)

        self._setup_central_widget()
        self.menu_builder.setup_actions()
        self.menu_builder.setup_menus()
        self.setup_status_bar()

        self.resize(640, 560)
        self.setWindowTitle("Image Pixelator")

        if image_path is None or not self.main_window_actions.load_image_file(image_path):
            self.image_view.set_image(make_test_card())

        self.logger.info("Main window initialized")

    def _setup_central_widget(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.addWidget(self.image_view, 1)

        buttons = QHBoxLayout()
        actions = self.main_window_actions
        for text, handler in (
            ("Pixelate", actions.pixelate),
            ("Re-pixelate", actions.repixelate),
            ("Restore", actions.restore),
        ):
            button = QPushButton(text, central)
            button.clicked.connect(handler)
            buttons.addWidget(button)
        layout.addLayout(buttons)

        self.setCentralWidget(central)

    def setup_status_bar(self) -> None:
        """Setup the status bar."""
        self.status_bar = self.statusBar()
        self.status_bar.showMessage("Ready", 3000)
        self.logger.debug("Status bar created")

    def apply_settings(self) -> None:
        """Push stored settings into the image view."""
        self.image_view.set_config(self.settings.reveal_config())
        self.image_view.engine.reseed(self.settings.pixelator.seed)

    def _on_run_finished(self, handle: RunHandle) -> None:
        if handle.state is RunState.COMPLETED:
            self.status_bar.showMessage(f"{handle.kind.value.capitalize()} finished", 3000)
        else:
            self.status_bar.showMessage(
                f"{handle.kind.value.capitalize()} cancelled, original restored", 3000
            )

    def closeEvent(self, event: QCloseEvent) -> None:
        """Restore the original image before the window goes away."""
        self.image_view.engine.teardown()
        self.logger.info("Main window closing")
        super().closeEvent(event)
