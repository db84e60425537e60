"""
Menu builder for main application window.
"""

import logging
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QMenuBar
from PySide6.QtGui import QAction, QKeySequence

if TYPE_CHECKING:
    from .main_window import MainWindow


class MenuBuilder:
    """Builds and manages the application menu bar."""

    def __init__(self, main_window: "MainWindow") -> None:
        """
        Initialize menu builder.

        Args:
            main_window: MainWindow instance that owns the menus
        """
        self.main_window = main_window
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def setup_actions(self) -> None:
        """Create all actions for menus."""
        self._setup_file_actions()
        self._setup_effect_actions()
        self._setup_settings_actions()

        self.logger.debug("Actions created")

    def _setup_file_actions(self) -> None:
        """Create File menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_open = QAction("&Open Image...", mw)
        mw.action_open.setShortcut(QKeySequence.StandardKey.Open)
        mw.action_open.setStatusTip("Open an image to pixelate")
        mw.action_open.triggered.connect(actions.open_image)

        mw.action_exit = QAction("E&xit", mw)
        mw.action_exit.setShortcut(QKeySequence.StandardKey.Quit)
        mw.action_exit.setStatusTip("Exit the application")
        mw.action_exit.triggered.connect(mw.close)

    def _setup_effect_actions(self) -> None:
        """Create Effect menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_pixelate = QAction("&Pixelate", mw)
        mw.action_pixelate.setShortcut(QKeySequence("P"))
        mw.action_pixelate.setStatusTip("Hide the image tile by tile")
        mw.action_pixelate.triggered.connect(actions.pixelate)

        mw.action_repixelate = QAction("&Re-pixelate", mw)
        mw.action_repixelate.setShortcut(QKeySequence("R"))
        mw.action_repixelate.setStatusTip("Reveal the image tile by tile")
        mw.action_repixelate.triggered.connect(actions.repixelate)

        mw.action_restore = QAction("Re&store Original", mw)
        mw.action_restore.setShortcut(QKeySequence("Esc"))
        mw.action_restore.setStatusTip("Stop the effect and show the original image")
        mw.action_restore.triggered.connect(actions.restore)

    def _setup_settings_actions(self) -> None:
        """Create Settings menu actions."""
        mw = self.main_window
        actions = mw.main_window_actions

        mw.action_grid_settings = QAction("&Pixelation Settings...", mw)
        mw.action_grid_settings.setStatusTip("Configure rows, columns and delay")
        mw.action_grid_settings.triggered.connect(actions.grid_settings)

    def setup_menus(self) -> None:
        """Setup the menu bar."""
        menubar = self.main_window.menuBar()

        self._setup_file_menu(menubar)
        self._setup_effect_menu(menubar)
        self._setup_settings_menu(menubar)

        self.logger.debug("Menus created")

    def _setup_file_menu(self, menubar: QMenuBar) -> None:
        """Setup File menu."""
        mw = self.main_window
        file_menu = menubar.addMenu("&File")
        file_menu.addAction(mw.action_open)  # type: ignore[arg-type]
        file_menu.addSeparator()
        file_menu.addAction(mw.action_exit)  # type: ignore[arg-type]

    def _setup_effect_menu(self, menubar: QMenuBar) -> None:
        """Setup Effect menu."""
        mw = self.main_window
        effect_menu = menubar.addMenu("&Effect")
        effect_menu.addAction(mw.action_pixelate)  # type: ignore[arg-type]
        effect_menu.addAction(mw.action_repixelate)  # type: ignore[arg-type]
        effect_menu.addSeparator()
        effect_menu.addAction(mw.action_restore)  # type: ignore[arg-type]

    def _setup_settings_menu(self, menubar: QMenuBar) -> None:
        """Setup Settings menu."""
        mw = self.main_window
        settings_menu = menubar.addMenu("&Settings")
        settings_menu.addAction(mw.action_grid_settings)  # type: ignore[arg-type]
