"""QTimer-backed scheduler for driving runs inside a Qt event loop."""

import logging
from typing import Any, Callable, Optional, Set

from PySide6.QtCore import QObject, QTimer


class QTimerScheduler:
    """Schedules engine steps with single-shot QTimers.

    Each pending callback owns one QTimer parented to ``parent`` so that
    timers die with the widget hosting the engine.
    """

    def __init__(self, parent: Optional[QObject] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._parent = parent
        self._timers: Set[QTimer] = set()

    @property
    def pending_count(self) -> int:
        return len(self._timers)

    def call_later(self, delay: float, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._fire(timer, callback))
        self._timers.add(timer)
        timer.start(max(0, round(delay * 1000)))
        return timer

    def cancel(self, token: Any) -> None:
        if token in self._timers:
            token.stop()
            self._release(token)

    def cancel_all(self) -> None:
        """Stop every pending timer."""
        for timer in list(self._timers):
            timer.stop()
            self._release(timer)

    def _fire(self, timer: QTimer, callback: Callable[[], None]) -> None:
        if timer not in self._timers:
            # Stopped between timeout and dispatch
            return
        self._release(timer)
        callback()

    def _release(self, timer: QTimer) -> None:
        self._timers.discard(timer)
        timer.deleteLater()
