"""Widget hosting a TiledRevealEngine.

Binds the engine to the Qt lifecycle: commits are shown as pixmaps,
hiding the widget restores the original image and application shutdown
releases the captured buffer.
"""

import logging
from typing import Optional

from PIL import Image
from PIL.ImageQt import ImageQt
from PySide6.QtCore import QCoreApplication, Qt, Signal
from PySide6.QtGui import QHideEvent, QPixmap
from PySide6.QtWidgets import QLabel, QWidget

from ..core import PixelBuffer, RevealConfig, RunHandle, Scheduler, TiledRevealEngine
from .qt_scheduler import QTimerScheduler


class PixelatedImageView(QLabel):
    """Image label that can pixelate away and re-pixelate its image."""

    run_started = Signal(object)  # RunHandle
    run_finished = Signal(object)  # RunHandle

    def __init__(
        self,
        config: Optional[RevealConfig] = None,
        parent: Optional[QWidget] = None,
        scheduler: Optional[Scheduler] = None,
        seed: Optional[int] = None,
    ):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self.scheduler = scheduler if scheduler is not None else QTimerScheduler(self)
        self.engine = TiledRevealEngine(self.scheduler, config=config, seed=seed)
        self.engine.add_commit_listener(self._present)
        self.engine.add_finished_listener(self._on_run_finished)

        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumSize(64, 64)

        app = QCoreApplication.instance()
        if app is not None:
            app.aboutToQuit.connect(self._on_about_to_quit)

    # === HOST API ===

    def set_image(self, image: Image.Image) -> None:
        """Show ``image`` and capture it as the original."""
        self.engine.capture(image)
        self.logger.debug(f"Image set: {image.width}x{image.height}")

    def set_config(self, config: RevealConfig) -> None:
        """Use ``config`` for runs started from now on."""
        config.validate()
        self.engine.config = config

    def pixelate_image(self) -> RunHandle:
        """Start hiding the image tile by tile."""
        handle = self.engine.start_hide_run()
        self.run_started.emit(handle)
        return handle

    def repixelate_image(self) -> RunHandle:
        """Start revealing the image tile by tile from fully transparent."""
        handle = self.engine.start_reveal_run()
        self.run_started.emit(handle)
        return handle

    def restore_original_image(self) -> None:
        """Stop any run and show the original image."""
        self.engine.restore_original()

    def cancel(self) -> bool:
        """Cancel the active run, restoring the original image."""
        return self.engine.cancel()

    # === LIFECYCLE ===

    def hideEvent(self, event: QHideEvent) -> None:
        """Restore the original image whenever the view is hidden."""
        self.engine.teardown()
        super().hideEvent(event)

    def _on_about_to_quit(self) -> None:
        self.logger.debug("Application quitting, shutting engine down")
        self.engine.shutdown()
        if isinstance(self.scheduler, QTimerScheduler):
            self.scheduler.cancel_all()

    # === PRESENTATION ===

    def _present(self, buffer: PixelBuffer) -> None:
        qt_image = ImageQt(buffer.to_image())
        self.setPixmap(QPixmap.fromImage(qt_image))

    def _on_run_finished(self, handle: RunHandle) -> None:
        self.run_finished.emit(handle)
