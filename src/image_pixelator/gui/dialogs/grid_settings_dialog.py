"""
Grid and timing settings dialog for image_pixelator.
"""

import logging
from typing import Optional
from PySide6.QtCore import Qt
from PySide6.QtGui import QShowEvent
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QLabel,
    QSpinBox,
    QDoubleSpinBox,
    QCheckBox,
    QDialogButtonBox,
    QMessageBox,
    QWidget,
)

from ...settings import AppSettings, ConfigError
from ...settings.pixelator import MAX_DELAY, MAX_GRID


class GridSettingsDialog(QDialog):
    """Dialog for configuring rows, columns and delay between tiles."""

    def __init__(self, settings: AppSettings, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings

        self.setWindowTitle("Pixelation Settings")
        self.setWindowFlags(
            Qt.WindowType.Dialog
            | Qt.WindowType.CustomizeWindowHint
            | Qt.WindowType.WindowTitleHint
        )
        self.setModal(True)

        self._setup_ui()
        self._load_settings()

    def showEvent(self, arg__1: QShowEvent) -> None:
        """Auto-adjust dialog size when shown."""
        super().showEvent(arg__1)
        self.adjustSize()

    def _setup_ui(self):
        """Setup the user interface."""
        main_vbox = QVBoxLayout(self)
        form_layout = QFormLayout()

        self.rows_spinbox = QSpinBox()
        self.rows_spinbox.setRange(1, MAX_GRID)
        self.rows_spinbox.setToolTip("Number of tile rows")
        form_layout.addRow("Rows:", self.rows_spinbox)

        self.columns_spinbox = QSpinBox()
        self.columns_spinbox.setRange(1, MAX_GRID)
        self.columns_spinbox.setToolTip("Number of tile columns")
        form_layout.addRow("Columns:", self.columns_spinbox)

        self.delay_spinbox = QDoubleSpinBox()
        self.delay_spinbox.setRange(0.0, MAX_DELAY)
        self.delay_spinbox.setDecimals(2)
        self.delay_spinbox.setSingleStep(0.05)
        self.delay_spinbox.setSuffix(" s")
        self.delay_spinbox.setToolTip("Delay before each tile is toggled")
        form_layout.addRow("Delay between parts:", self.delay_spinbox)

        self.absorb_checkbox = QCheckBox("Edge tiles cover leftover pixels")
        self.absorb_checkbox.setToolTip(
            "When the image size is not divisible by the grid, the last row "
            "and column of tiles extend to the image edge"
        )
        form_layout.addRow(self.absorb_checkbox)

        info_label = QLabel(
            "The image is split into rows x columns tiles that are hidden or "
            "revealed one at a time in random order."
        )
        info_label.setWordWrap(True)
        form_layout.addRow(info_label)

        main_vbox.addLayout(form_layout)

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self._save_and_accept)
        button_box.rejected.connect(self.reject)
        main_vbox.addWidget(button_box)

    def _load_settings(self):
        """Load current settings into UI."""
        pixelator = self.settings.pixelator
        self.rows_spinbox.setValue(pixelator.rows)
        self.columns_spinbox.setValue(pixelator.columns)
        self.delay_spinbox.setValue(pixelator.delay_between_parts)
        self.absorb_checkbox.setChecked(pixelator.absorb_remainder)

    def _save_and_accept(self):
        """Save settings and close dialog."""
        pixelator = self.settings.pixelator
        pixelator.rows = self.rows_spinbox.value()
        pixelator.columns = self.columns_spinbox.value()
        pixelator.delay_between_parts = self.delay_spinbox.value()
        pixelator.absorb_remainder = self.absorb_checkbox.isChecked()
        try:
            self.settings.sync()
        except ConfigError as e:
            self.logger.error(f"Failed to save pixelation settings: {e}")
            QMessageBox.warning(self, "Settings not saved", str(e))
            return
        self.logger.info(
            f"Pixelation settings saved: {pixelator.rows}x{pixelator.columns}, "
            f"{pixelator.delay_between_parts}s"
        )
        self.accept()
