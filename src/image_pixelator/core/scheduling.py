"""Delay-based schedulers that drive reveal runs.

The engine only needs "call this after N seconds" and "never mind".
Hosts provide whichever implementation matches their event loop:
ManualScheduler for headless use and tests, AsyncioScheduler for asyncio
applications, and QTimerScheduler (in the gui package) for Qt.
"""

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

Callback = Callable[[], None]


class Scheduler(Protocol):
    """Minimal timer interface used by TiledRevealEngine."""

    def call_later(self, delay: float, callback: Callback) -> Any:
        """Schedule ``callback`` after ``delay`` seconds; return a cancel token."""
        ...

    def cancel(self, token: Any) -> None:
        """Cancel a pending callback. Unknown or fired tokens are ignored."""
        ...


@dataclass(order=True)
class _Pending:
    due: float
    seq: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class ManualScheduler:
    """Scheduler driven by an explicit virtual clock.

    Nothing happens until the host calls advance(), run_pending() or
    run_until_idle(). Callbacks fire in due-time order; callbacks with the
    same due time fire in the order they were scheduled.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._queue: list[_Pending] = []
        self._seq = itertools.count()
        self._now: float = 0.0

    @property
    def now(self) -> float:
        """Current virtual time in seconds."""
        return self._now

    @property
    def pending_count(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for p in self._queue if not p.cancelled)

    def call_later(self, delay: float, callback: Callback) -> _Pending:
        pending = _Pending(self._now + max(0.0, delay), next(self._seq), callback)
        heapq.heappush(self._queue, pending)
        return pending

    def cancel(self, token: Any) -> None:
        if isinstance(token, _Pending):
            token.cancelled = True

    def next_due(self) -> Optional[float]:
        """Due time of the earliest live callback, or None when idle."""
        self._drop_cancelled()
        return self._queue[0].due if self._queue else None

    def run_pending(self) -> int:
        """Fire every callback that is due at the current time.

        Callbacks scheduled with zero delay while running are fired too.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0].due > self._now:
                return fired
            pending = heapq.heappop(self._queue)
            pending.callback()
            fired += 1

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing callbacks as their time comes.

        Returns:
            Number of callbacks fired
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds})")

        target = self._now + seconds
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self._now = max(self._now, due)
            fired += self.run_pending()
        self._now = target
        return fired

    def run_until_idle(self, max_steps: int = 100_000) -> int:
        """Fire callbacks, jumping the clock, until nothing is pending.

        Raises:
            RuntimeError: If more than ``max_steps`` callbacks fire
        """
        fired = 0
        while True:
            due = self.next_due()
            if due is None:
                return fired
            self._now = max(self._now, due)
            fired += self.run_pending()
            if fired > max_steps:
                raise RuntimeError(f"Scheduler still busy after {max_steps} callbacks")

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0.0, delay), callback)

    def cancel(self, token: Any) -> None:
        if isinstance(token, asyncio.TimerHandle):
            token.cancel()
