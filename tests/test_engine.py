"""Tests for TiledRevealEngine driven by a ManualScheduler."""

import pytest

from image_pixelator.core import (
    GeometryMismatch,
    InvalidConfiguration,
    ManualScheduler,
    NotInitialized,
    PixelBuffer,
    RevealConfig,
    RunKind,
    RunState,
    TiledRevealEngine,
    tile_rect,
)
from image_pixelator.core.geometry import TileRect

from .conftest import make_image


def make_engine(width=16, height=16, config=None, seed=1):
    scheduler = ManualScheduler()
    engine = TiledRevealEngine(scheduler, config=config, seed=seed)
    original = make_image(width, height)
    engine.capture(original)
    return engine, scheduler, PixelBuffer(original)


def transparent_tile_count(buffer: PixelBuffer, rows: int, columns: int) -> int:
    return sum(
        buffer.is_region_transparent(tile_rect(i, rows, columns, buffer.width, buffer.height))
        for i in range(rows * columns)
    )


class TestCaptureAndRestore:
    """Test capture, restore and lifecycle hooks."""

    def test_capture_sets_live_to_original(self) -> None:
        engine, _, original = make_engine()
        assert engine.is_captured
        assert engine.size == (16, 16)
        assert engine.live_buffer.equals(original)
        assert engine.state is RunState.IDLE

    def test_restore_before_capture(self) -> None:
        engine = TiledRevealEngine(ManualScheduler())
        with pytest.raises(NotInitialized):
            engine.restore_original()

    def test_run_before_capture(self) -> None:
        engine = TiledRevealEngine(ManualScheduler())
        with pytest.raises(NotInitialized):
            engine.start_hide_run()
        with pytest.raises(NotInitialized):
            engine.start_reveal_run()

    def test_restore_is_idempotent(self) -> None:
        engine, scheduler, original = make_engine()
        engine.start_hide_run(delay=1.0)
        scheduler.advance(5.0)

        engine.restore_original()
        once = engine.live_buffer.tobytes()
        engine.restore_original()

        assert engine.live_buffer.tobytes() == once
        assert engine.live_buffer.equals(original)

    def test_restore_cancels_active_run(self) -> None:
        engine, scheduler, _ = make_engine()
        handle = engine.start_hide_run(delay=1.0)
        scheduler.advance(3.0)

        engine.restore_original()

        assert handle.state is RunState.CANCELLED
        assert not engine.is_running
        assert engine.matches_original()
        assert scheduler.pending_count == 0

    def test_teardown_restores(self) -> None:
        engine, scheduler, _ = make_engine()
        engine.start_reveal_run(delay=1.0)
        scheduler.advance(2.0)
        engine.teardown()
        assert engine.matches_original()

    def test_teardown_before_capture_is_noop(self) -> None:
        TiledRevealEngine(ManualScheduler()).teardown()

    def test_shutdown_restores_then_releases(self) -> None:
        engine, scheduler, original = make_engine()
        frames = []
        engine.add_commit_listener(lambda buffer: frames.append(buffer.copy()))
        engine.start_hide_run(delay=1.0)
        scheduler.advance(4.0)

        engine.shutdown()

        assert frames[-1].equals(original)
        assert not engine.is_captured
        with pytest.raises(NotInitialized):
            engine.restore_original()

    def test_recapture_mid_run_resets(self, caplog) -> None:
        engine, scheduler, _ = make_engine()
        handle = engine.start_hide_run(delay=1.0)
        scheduler.advance(2.0)

        replacement = make_image(20, 12, seed=3)
        engine.capture(replacement)

        assert handle.state is RunState.CANCELLED
        assert not engine.is_running
        assert engine.size == (20, 12)
        assert engine.live_buffer.equals(PixelBuffer(replacement))
        # The old run's timer must not touch the new image
        scheduler.run_until_idle()
        assert engine.matches_original()
        assert "Image replaced" in caplog.text


class TestHideRun:
    """Test hide runs."""

    @pytest.mark.parametrize("rows", range(1, 17))
    def test_hide_ends_fully_transparent(self, rows: int) -> None:
        """All grids 1..16 on a non-divisible image end with alpha 0 everywhere."""
        for columns in range(1, 17):
            engine, scheduler, _ = make_engine(37, 29, seed=rows * 100 + columns)
            handle = engine.start_hide_run(rows, columns, 0)
            scheduler.run_until_idle()

            assert handle.state is RunState.COMPLETED
            assert handle.steps_done == rows * columns
            assert engine.live_buffer.is_transparent(), f"{rows}x{columns}"

    def test_four_by_four_scenario(self) -> None:
        """4x4 grid, 16x16 image, delay 0: 16 steps, one new tile each."""
        engine, scheduler, _ = make_engine(16, 16)
        counts = []
        handle = engine.start_hide_run(4, 4, 0)
        engine.add_commit_listener(
            lambda buffer: counts.append(transparent_tile_count(buffer, 4, 4))
        )

        scheduler.run_until_idle()

        assert counts == list(range(1, 17))
        assert sorted(handle.order) == list(range(16))
        assert engine.live_buffer.is_transparent()
        assert engine.state is RunState.IDLE

    def test_two_by_two_scenario(self) -> None:
        """2x2 grid on 10x10: every tile is 5x5 and the legacy strip never appears."""
        config = RevealConfig(absorb_remainder=False)
        engine, scheduler, _ = make_engine(10, 10, config=config)
        handle = engine.start_hide_run(2, 2, 0)

        for index in range(4):
            rect = tile_rect(index, 2, 2, 10, 10)
            assert (rect.width, rect.height) == (5, 5)

        scheduler.run_until_idle()
        assert handle.steps_done == 4
        assert engine.live_buffer.is_transparent()

    def test_visits_tiles_in_handle_order(self) -> None:
        engine, scheduler, _ = make_engine(16, 16)
        handle = engine.start_hide_run(4, 4, 1.0)

        for step, index in enumerate(handle.order, start=1):
            scheduler.advance(1.0)
            assert handle.steps_done == step
            assert engine.live_buffer.is_region_transparent(tile_rect(index, 4, 4, 16, 16))

    def test_waits_before_each_tile(self) -> None:
        engine, scheduler, _ = make_engine()
        handle = engine.start_hide_run(4, 4, 1.0)

        scheduler.advance(0.5)
        assert handle.steps_done == 0
        assert engine.matches_original()

        scheduler.advance(0.5)
        assert handle.steps_done == 1

    def test_hide_starts_from_original(self) -> None:
        """A new hide run first restores a previously hidden image."""
        engine, scheduler, _ = make_engine()
        engine.start_hide_run(2, 2, 0)
        scheduler.run_until_idle()
        assert engine.live_buffer.is_transparent()

        engine.start_hide_run(2, 2, 1.0)
        assert engine.matches_original()

    def test_legacy_remainder_strip(self) -> None:
        """Without remainder absorption the right/bottom strip stays visible."""
        config = RevealConfig(absorb_remainder=False)
        engine, scheduler, original = make_engine(10, 10, config=config)
        engine.start_hide_run(3, 3, 0)
        scheduler.run_until_idle()

        live = engine.live_buffer
        assert live.is_region_transparent(TileRect(0, 0, 9, 9))
        assert live.region_equals(original, TileRect(9, 0, 1, 10))
        assert live.region_equals(original, TileRect(0, 9, 10, 1))

    def test_config_swap_mid_run_keeps_tile_layout(self) -> None:
        """A run keeps the edge handling it started with."""
        engine, scheduler, _ = make_engine(10, 10)
        handle = engine.start_hide_run(3, 3, 1.0)
        scheduler.advance(1.0)

        engine.config = RevealConfig(absorb_remainder=False)
        scheduler.run_until_idle()

        assert handle.absorb_remainder is True
        assert handle.state is RunState.COMPLETED
        assert engine.live_buffer.is_transparent()

    @pytest.mark.parametrize("k", range(16))
    def test_cancel_at_any_step_restores(self, k: int) -> None:
        engine, scheduler, original = make_engine()
        handle = engine.start_hide_run(4, 4, 1.0)
        scheduler.advance(float(k))
        assert handle.steps_done == k

        assert engine.cancel(handle)
        engine.restore_original()

        assert handle.state is RunState.CANCELLED
        assert engine.live_buffer.equals(original)
        scheduler.run_until_idle()
        assert handle.steps_done == k
        assert engine.live_buffer.equals(original)


class TestRevealRun:
    """Test reveal runs."""

    def test_reveal_starts_transparent(self) -> None:
        engine, _, _ = make_engine()
        engine.start_reveal_run(4, 4, 1.0)
        assert engine.live_buffer.is_transparent()

    @pytest.mark.parametrize("rows", [1, 2, 3, 5, 7, 16])
    def test_reveal_restores_exactly(self, rows: int) -> None:
        for columns in range(1, 17):
            for absorb in (True, False):
                config = RevealConfig(absorb_remainder=absorb)
                engine, scheduler, original = make_engine(37, 29, config=config)
                handle = engine.start_reveal_run(rows, columns, 0)
                scheduler.run_until_idle()

                assert handle.state is RunState.COMPLETED
                assert handle.kind is RunKind.REVEAL
                assert engine.live_buffer.equals(original)

    def test_reveal_copies_tiles_in_order(self) -> None:
        engine, scheduler, original = make_engine(16, 16)
        handle = engine.start_reveal_run(4, 4, 1.0)

        scheduler.advance(1.0)
        first = tile_rect(handle.order[0], 4, 4, 16, 16)
        assert engine.live_buffer.region_equals(original, first)
        assert transparent_tile_count(engine.live_buffer, 4, 4) == 15

    def test_cancel_reveal_restores(self) -> None:
        engine, scheduler, original = make_engine()
        handle = engine.start_reveal_run(4, 4, 1.0)
        scheduler.advance(3.0)
        handle.cancel()
        assert engine.live_buffer.equals(original)


class TestRunStateMachine:
    """Test run lifecycle, handles and listeners."""

    def test_new_run_cancels_running_one(self) -> None:
        engine, scheduler, _ = make_engine()
        first = engine.start_hide_run(4, 4, 1.0)
        scheduler.advance(2.0)

        second = engine.start_reveal_run(4, 4, 1.0)

        assert first.state is RunState.CANCELLED
        assert second.state is RunState.RUNNING
        assert engine.current_run is second
        assert second.run_id != first.run_id
        scheduler.run_until_idle()
        assert first.steps_done == 2
        assert second.state is RunState.COMPLETED

    def test_stale_cancel_is_noop(self) -> None:
        engine, scheduler, _ = make_engine()
        first = engine.start_hide_run(2, 2, 0)
        scheduler.run_until_idle()
        second = engine.start_hide_run(2, 2, 1.0)

        assert not first.cancel()
        assert second.is_running
        assert not engine.cancel(first)

    def test_cancel_without_run(self) -> None:
        engine, _, _ = make_engine()
        assert not engine.cancel()

    def test_finished_listener(self) -> None:
        engine, scheduler, _ = make_engine()
        finished = []
        engine.add_finished_listener(finished.append)

        done = engine.start_hide_run(2, 2, 0)
        scheduler.run_until_idle()
        cancelled = engine.start_reveal_run(2, 2, 1.0)
        engine.cancel()

        assert finished == [done, cancelled]
        assert done.is_finished and cancelled.is_finished
        assert [h.state for h in finished] == [RunState.COMPLETED, RunState.CANCELLED]

    def test_failing_listener_does_not_stop_run(self, caplog) -> None:
        engine, scheduler, _ = make_engine()

        def broken(buffer):
            raise RuntimeError("display gone")

        engine.add_commit_listener(broken)
        handle = engine.start_hide_run(2, 2, 0)
        scheduler.run_until_idle()

        assert handle.state is RunState.COMPLETED
        assert "display gone" in caplog.text

    def test_removed_listener_not_called(self) -> None:
        engine, scheduler, _ = make_engine()
        calls = []
        listener = calls.append
        engine.add_commit_listener(listener)
        engine.remove_commit_listener(listener)
        engine.start_hide_run(2, 2, 0)
        scheduler.run_until_idle()
        assert calls == []

    def test_config_defaults(self) -> None:
        config = RevealConfig(rows=2, columns=3, delay_between_parts=0.25)
        engine, scheduler, _ = make_engine(config=config)
        handle = engine.start_hide_run()
        assert (handle.rows, handle.columns, handle.delay) == (2, 3, 0.25)
        assert handle.total_steps == 6
        scheduler.advance(0.25)
        assert handle.steps_done == 1

    def test_same_seed_same_order(self) -> None:
        a, _, _ = make_engine(seed=11)
        b, _, _ = make_engine(seed=11)
        assert a.start_hide_run(4, 4, 0).order == b.start_hide_run(4, 4, 0).order

    def test_reseed_restarts_order_sequence(self) -> None:
        engine, scheduler, _ = make_engine(seed=5)
        first = engine.start_hide_run(4, 4, 0).order
        scheduler.run_until_idle()

        engine.reseed(5)

        assert engine.start_hide_run(4, 4, 0).order == first

    def test_fresh_order_per_run(self) -> None:
        engine, scheduler, _ = make_engine(seed=3)
        orders = set()
        for _ in range(10):
            orders.add(engine.start_hide_run(4, 4, 0).order)
            scheduler.run_until_idle()
        assert len(orders) == 10


class TestErrors:
    """Test fail-fast validation at run start."""

    @pytest.mark.parametrize("rows,columns", [(0, 4), (4, 0), (-3, 2)])
    def test_invalid_grid_starts_nothing(self, rows, columns) -> None:
        engine, scheduler, original = make_engine()
        with pytest.raises(InvalidConfiguration):
            engine.start_hide_run(rows, columns, 0)
        assert not engine.is_running
        assert scheduler.pending_count == 0
        assert engine.live_buffer.equals(original)

    def test_invalid_grid_keeps_running_run(self) -> None:
        engine, scheduler, _ = make_engine()
        handle = engine.start_hide_run(4, 4, 1.0)
        with pytest.raises(InvalidConfiguration):
            engine.start_reveal_run(0, 4, 1.0)
        assert handle.is_running

    def test_negative_delay(self) -> None:
        engine, _, _ = make_engine()
        with pytest.raises(InvalidConfiguration):
            engine.start_reveal_run(4, 4, -1)

    def test_grid_finer_than_image(self) -> None:
        engine, _, _ = make_engine(8, 8)
        with pytest.raises(GeometryMismatch):
            engine.start_hide_run(4, 9, 0)

    def test_invalid_config_object(self) -> None:
        with pytest.raises(InvalidConfiguration):
            RevealConfig(rows=0).validate()

    @pytest.mark.parametrize("delay", [float("nan"), float("inf")])
    def test_non_finite_delay_starts_nothing(self, delay) -> None:
        engine, scheduler, original = make_engine()
        with pytest.raises(InvalidConfiguration):
            engine.start_hide_run(4, 4, delay)
        assert engine.state is RunState.IDLE
        assert scheduler.pending_count == 0
        assert engine.live_buffer.equals(original)

    def test_scheduler_failure_leaves_engine_idle(self) -> None:
        """A timer that cannot be armed rolls the run back and restores."""

        class BrokenScheduler(ManualScheduler):
            def call_later(self, delay, callback):
                raise OverflowError("timer out of range")

        engine = TiledRevealEngine(BrokenScheduler(), seed=1)
        original = make_image(16, 16)
        engine.capture(original)

        with pytest.raises(OverflowError):
            engine.start_reveal_run(4, 4, 1.0)

        assert engine.state is RunState.IDLE
        assert engine.current_run is None
        assert engine.live_buffer.equals(PixelBuffer(original))
