"""Tiled reveal/hide engine.

Owns the captured original image and the live image shown by the host,
and walks a randomized tile order on a delay-based scheduler to hide or
reveal the image tile by tile. Whenever a run stops early the live image
is restored to the captured original.
"""

import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from PIL import Image

from .errors import NotInitialized
from .geometry import (
    TileRect,
    check_grid_fits,
    covering_tile_rect,
    tile_rect,
    validate_delay,
    validate_grid,
)
from .ordering import make_rng, visitation_order
from .pixels import PixelBuffer
from .scheduling import Scheduler

CommitListener = Callable[[PixelBuffer], None]
FinishedListener = Callable[["RunHandle"], None]


class RunKind(Enum):
    """Direction of a run."""

    HIDE = "hide"
    REVEAL = "reveal"


class RunState(Enum):
    """Lifecycle of a run: IDLE -> RUNNING -> COMPLETED | CANCELLED."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class RevealConfig:
    """Default grid and timing for runs started without explicit arguments."""

    rows: int = 4
    columns: int = 4
    delay_between_parts: float = 0.5  # seconds
    absorb_remainder: bool = True

    def validate(self) -> None:
        """Raise InvalidConfiguration if the values cannot drive a run."""
        validate_grid(self.rows, self.columns)
        validate_delay(self.delay_between_parts)


class RunHandle:
    """Cancellable handle for one hide or reveal run.

    The handle keeps its terminal state (COMPLETED or CANCELLED) after the
    engine has gone back to idle.
    """

    def __init__(
        self,
        engine: "TiledRevealEngine",
        run_id: int,
        kind: RunKind,
        rows: int,
        columns: int,
        delay: float,
        order: list[int],
        absorb_remainder: bool = True,
    ):
        self._engine = engine
        self.run_id = run_id
        self.kind = kind
        self.rows = rows
        self.columns = columns
        self.delay = delay
        self.absorb_remainder = absorb_remainder
        self.order: tuple[int, ...] = tuple(order)
        self.steps_done = 0
        self.state = RunState.RUNNING

    @property
    def total_steps(self) -> int:
        return len(self.order)

    @property
    def is_running(self) -> bool:
        return self.state is RunState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.state in (RunState.COMPLETED, RunState.CANCELLED)

    def cancel(self) -> bool:
        """Cancel this run if it is still the active one."""
        return self._engine.cancel(self)

    def __repr__(self) -> str:
        return (
            f"RunHandle(id={self.run_id}, kind={self.kind.value}, "
            f"state={self.state.value}, step={self.steps_done}/{self.total_steps})"
        )


class TiledRevealEngine:
    """Hides or reveals an image tile by tile in random order.

    Single writer of the live image: hosts read it through commit listeners
    or frame() and must not mutate the buffer they are handed.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: Optional[RevealConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        """Initialize the engine.

        Args:
            scheduler: Timer used to space out run steps
            config: Defaults for rows, columns and delay
            rng: Random generator for visitation orders (seed hook)
            seed: Seed for a private generator, used when rng is None
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.scheduler = scheduler
        self.config = config or RevealConfig()
        self._rng = rng if rng is not None else make_rng(seed)

        self._original: Optional[PixelBuffer] = None
        self._live: Optional[PixelBuffer] = None

        self._run: Optional[RunHandle] = None
        self._timer_token: Any = None
        self._run_ids = itertools.count(1)

        self._commit_listeners: list[CommitListener] = []
        self._finished_listeners: list[FinishedListener] = []

    # === LISTENERS ===

    def add_commit_listener(self, callback: CommitListener) -> None:
        """Call ``callback`` with the live buffer after every change."""
        if callback not in self._commit_listeners:
            self._commit_listeners.append(callback)

    def remove_commit_listener(self, callback: CommitListener) -> None:
        if callback in self._commit_listeners:
            self._commit_listeners.remove(callback)

    def add_finished_listener(self, callback: FinishedListener) -> None:
        """Call ``callback`` with the handle when a run completes or is cancelled."""
        if callback not in self._finished_listeners:
            self._finished_listeners.append(callback)

    def reseed(self, seed: Optional[int] = None) -> None:
        """Replace the order generator; a fixed seed makes later runs reproducible."""
        self._rng = make_rng(seed)

    # === STATE ===

    @property
    def is_captured(self) -> bool:
        return self._original is not None

    @property
    def is_running(self) -> bool:
        return self._run is not None

    @property
    def state(self) -> RunState:
        return RunState.RUNNING if self._run is not None else RunState.IDLE

    @property
    def current_run(self) -> Optional[RunHandle]:
        return self._run

    @property
    def size(self) -> tuple[int, int]:
        return self._require_original().size

    @property
    def live_buffer(self) -> PixelBuffer:
        """The live buffer itself (read-only for callers)."""
        self._require_original()
        assert self._live is not None
        return self._live

    def frame(self) -> Image.Image:
        """Copy of the live image."""
        return self.live_buffer.to_image()

    def original(self) -> Image.Image:
        """Copy of the captured original image."""
        return self._require_original().to_image()

    def matches_original(self) -> bool:
        """Check whether the live image equals the captured original."""
        return self.live_buffer.equals(self._original)

    # === CAPTURE ===

    def capture(self, image: Image.Image) -> None:
        """Capture ``image`` as the original and reset the live image to it.

        Replaces any earlier capture. A run in progress is dropped without
        restoring, since the image it was working on no longer exists.
        """
        if self._run is not None:
            self.logger.warning(
                f"Image replaced during {self._run.kind.value} run "
                f"{self._run.run_id}, cancelling it"
            )
            run = self._run
            self._stop_timer()
            self._finish(run, RunState.CANCELLED)

        self._original = PixelBuffer(image)
        self._live = self._original.copy()
        self.logger.debug(f"Captured {self._original.width}x{self._original.height} image")
        self._commit()

    # === RUNS ===

    def start_hide_run(
        self,
        rows: Optional[int] = None,
        columns: Optional[int] = None,
        delay: Optional[float] = None,
    ) -> RunHandle:
        """Start making the image transparent tile by tile.

        Args:
            rows: Grid rows (config default if None)
            columns: Grid columns (config default if None)
            delay: Seconds to wait before each tile (config default if None)

        Returns:
            Handle for the new run

        Raises:
            InvalidConfiguration: If the grid or delay is invalid
            NotInitialized: If no image has been captured
            GeometryMismatch: If the grid is finer than the image
        """
        return self._start(RunKind.HIDE, rows, columns, delay)

    def start_reveal_run(
        self,
        rows: Optional[int] = None,
        columns: Optional[int] = None,
        delay: Optional[float] = None,
    ) -> RunHandle:
        """Start from a transparent image and bring tiles back one by one.

        Arguments and errors as for start_hide_run().
        """
        return self._start(RunKind.REVEAL, rows, columns, delay)

    def cancel(self, handle: Optional[RunHandle] = None) -> bool:
        """Stop the active run and restore the original image.

        Args:
            handle: Run to cancel; None cancels whatever run is active

        Returns:
            True if a run was cancelled, False if there was nothing to do
        """
        run = self._run
        if run is None:
            self.logger.debug("Cancel requested with no active run")
            return False
        if handle is not None and handle is not run:
            self.logger.debug(f"Ignoring cancel for inactive run {handle.run_id}")
            return False

        self._stop_timer()
        self._run = None
        self._restore()
        self._finish(run, RunState.CANCELLED)
        return True

    def restore_original(self) -> None:
        """Copy the whole captured image over the live image.

        Cancels any active run first. Safe to call repeatedly.

        Raises:
            NotInitialized: If no image has been captured
        """
        self._require_original()
        if self.cancel():
            return
        self._restore()

    # === HOST LIFECYCLE ===

    def teardown(self) -> None:
        """Host hook for "component disabled": restore if there is anything to restore."""
        if not self.is_captured:
            self.logger.debug("Teardown before capture, nothing to restore")
            return
        self.restore_original()

    def shutdown(self) -> None:
        """Host hook for process shutdown: restore, then release the buffers."""
        self.teardown()
        self._original = None
        self._live = None
        self.logger.debug("Engine shut down, captured image released")

    # === INTERNALS ===

    def _start(
        self,
        kind: RunKind,
        rows: Optional[int],
        columns: Optional[int],
        delay: Optional[float],
    ) -> RunHandle:
        rows = self.config.rows if rows is None else rows
        columns = self.config.columns if columns is None else columns
        delay = self.config.delay_between_parts if delay is None else delay

        validate_grid(rows, columns)
        validate_delay(delay)
        original = self._require_original()
        check_grid_fits(rows, columns, original.width, original.height)

        # Any active run ends in CANCELLED with a full restore
        self.cancel()

        assert self._live is not None
        if kind is RunKind.HIDE:
            self._live.copy_from(original)
        else:
            self._live.clear()
        self._commit()

        order = visitation_order(rows * columns, self._rng)
        run = RunHandle(
            self,
            next(self._run_ids),
            kind,
            rows,
            columns,
            delay,
            order,
            absorb_remainder=self.config.absorb_remainder,
        )
        self._run = run
        self.logger.debug(
            f"Starting {kind.value} run {run.run_id}: {rows}x{columns} grid, "
            f"{delay}s per tile"
        )
        try:
            self._schedule_step(run)
        except Exception as e:
            self.logger.error(f"Could not schedule {kind.value} run {run.run_id}: {e}")
            self._timer_token = None
            self._run = None
            run.state = RunState.CANCELLED
            self._restore()
            raise
        return run

    def _schedule_step(self, run: RunHandle) -> None:
        self._timer_token = self.scheduler.call_later(
            run.delay, lambda: self._step(run)
        )

    def _step(self, run: RunHandle) -> None:
        if run is not self._run:
            self.logger.debug(f"Ignoring stale step for run {run.run_id}")
            return

        self._timer_token = None
        assert self._live is not None and self._original is not None

        rect = self._tile_rect(run, run.order[run.steps_done])
        if run.kind is RunKind.HIDE:
            self._live.clear_region(rect)
        else:
            self._live.copy_region_from(self._original, rect)
        run.steps_done += 1

        if run.steps_done < run.total_steps:
            self._commit()
            self._schedule_step(run)
            return

        if run.kind is RunKind.REVEAL:
            # Covers remainder pixels no tile touched
            self._live.copy_from(self._original)
        self._commit()
        self._run = None
        self._finish(run, RunState.COMPLETED)

    def _tile_rect(self, run: RunHandle, index: int) -> TileRect:
        assert self._original is not None
        rect_fn = covering_tile_rect if run.absorb_remainder else tile_rect
        return rect_fn(
            index, run.rows, run.columns, self._original.width, self._original.height
        )

    def _restore(self) -> None:
        assert self._live is not None and self._original is not None
        self._live.copy_from(self._original)
        self._commit()

    def _stop_timer(self) -> None:
        if self._timer_token is not None:
            self.scheduler.cancel(self._timer_token)
            self._timer_token = None
        self._run = None

    def _finish(self, run: RunHandle, state: RunState) -> None:
        run.state = state
        if state is RunState.COMPLETED:
            self.logger.info(
                f"{run.kind.value.capitalize()} run {run.run_id} completed "
                f"after {run.steps_done} tiles"
            )
        else:
            self.logger.info(
                f"{run.kind.value.capitalize()} run {run.run_id} cancelled "
                f"at tile {run.steps_done}/{run.total_steps}"
            )
        for callback in list(self._finished_listeners):
            try:
                callback(run)
            except Exception as e:
                self.logger.error(f"Error in run finished listener: {e}", exc_info=True)

    def _commit(self) -> None:
        assert self._live is not None
        for callback in list(self._commit_listeners):
            try:
                callback(self._live)
            except Exception as e:
                self.logger.error(f"Error in commit listener: {e}", exc_info=True)

    def _require_original(self) -> PixelBuffer:
        if self._original is None:
            raise NotInitialized("No image captured; call capture() first")
        return self._original
