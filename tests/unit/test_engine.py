"""Unit tests for the grid engine wiring."""

import random
import unittest

import pytest

from hovergrid.config.schema import HovergridConfig
from hovergrid.core.engine import GridEngine
from hovergrid.core.models import CellState, GridCell


@pytest.fixture
def engine(fake_timers):
    return GridEngine(
        fake_timers,
        cell_size_source=lambda: 100,
        highlight_count=6,
        interval_ms=1600,
        jitter_ms=400,
        rng=random.Random(7),
    )


@pytest.fixture
def frames(engine):
    collected = []
    engine.add_listener(collected.append)
    return collected


def test_resize_emits_full_frame(engine, frames) -> None:
    engine.on_resize(300, 400)

    assert len(frames) == 1
    frame = frames[0]
    assert (frame.geometry.rows, frame.geometry.cols) == (3, 4)
    assert len(frame.cells) == 12
    assert len(frame.overlay) == 6
    assert frame.active_pointer is False


def test_resize_without_geometry_change_is_silent(engine, frames) -> None:
    engine.on_resize(300, 400)
    engine.on_resize(299, 390)
    assert len(frames) == 1


def test_zero_viewport_yields_empty_frame(engine, frames) -> None:
    engine.on_resize(300, 300)
    engine.on_resize(0, 0)

    frame = frames[-1]
    assert frame.cells == []
    assert frame.overlay == []
    assert not engine.scheduler.is_running


def test_pointer_events_drive_trail(engine, frames) -> None:
    engine.on_resize(300, 300)
    engine.on_pointer_move(150, 50)
    engine.on_pointer_move(250, 50)

    frame = frames[-1]
    states = {d.cell: d.state for d in frame.cells if d.state is not CellState.NONE}
    assert states == {GridCell(0, 2): CellState.ACTIVE, GridCell(0, 1): CellState.TRAILING}
    assert frame.active_pointer


def test_move_within_same_cell_does_not_emit(engine, frames) -> None:
    engine.on_resize(300, 300)
    engine.on_pointer_move(10, 10)
    count = len(frames)
    engine.on_pointer_move(20, 30)
    assert len(frames) == count


def test_idle_decay_emits_frame(engine, frames, fake_timers) -> None:
    engine.on_resize(300, 300)
    engine.on_pointer_move(50, 50)
    engine.on_pointer_move(150, 50)
    count = len(frames)

    fake_timers.advance(0.25)

    assert len(frames) == count + 1
    assert engine.trail == (GridCell(0, 1),)
    assert frames[-1].active_pointer is False


def test_leave_emits_cleared_frame(engine, frames) -> None:
    engine.on_resize(300, 300)
    engine.on_pointer_move(50, 50)
    engine.on_pointer_leave()

    frame = frames[-1]
    assert all(d.state is CellState.NONE for d in frame.cells)
    assert engine.trail == ()


def test_scheduler_refresh_emits_frame(engine, frames, fake_timers) -> None:
    engine.on_resize(300, 300)
    first = frames[-1].overlay
    fake_timers.advance(2.0)
    assert len(frames) == 2
    assert frames[-1].overlay != first


def test_toggle_highlights(engine, frames) -> None:
    engine.on_resize(300, 300)
    engine.set_highlights_enabled(False)
    assert frames[-1].overlay == []
    engine.set_highlights_enabled(True)
    assert len(frames[-1].overlay) == 6


def test_cell_size_refresh(fake_timers) -> None:
    size = {"value": 100}
    engine = GridEngine(fake_timers, cell_size_source=lambda: size["value"], rng=random.Random(1))
    engine.on_resize(300, 300)
    size["value"] = 50
    engine.refresh_cell_size()
    assert (engine.geometry.rows, engine.geometry.cols) == (6, 6)


def test_crashing_listener_is_isolated(engine, frames) -> None:
    def broken(_frame):
        raise RuntimeError("renderer failed")

    engine.remove_listener(frames.append)
    engine.add_listener(broken)
    engine.add_listener(frames.append)

    engine.on_resize(300, 300)
    assert len(frames) == 1


def test_close_cancels_timers_and_ignores_events(engine, frames, fake_timers) -> None:
    engine.on_resize(300, 300)
    engine.on_pointer_move(50, 50)
    engine.close()

    assert fake_timers.pending == []
    count = len(frames)
    engine.on_pointer_move(150, 150)
    engine.on_resize(600, 600)
    fake_timers.advance(10)
    assert len(frames) == count
    assert engine.is_closed


class TestEngineFromConfig(unittest.TestCase):
    def test_config_values_flow_into_components(self):
        config = HovergridConfig.model_validate(
            {
                "grid": {"cell_size": "20px"},
                "trail": {"limit": 3, "idle_timeout_ms": 500},
                "highlights": {"count": 2, "interval_ms": 1000, "enabled": False},
            }
        )
        engine = GridEngine.from_config(config, _NullTimers(), cell_size_source=lambda: None)
        engine.on_resize(100, 100)

        self.assertEqual(engine.geometry.cell_size, 20)
        self.assertEqual(engine.tracker.trail_limit, 3)
        self.assertEqual(engine.tracker.idle_timeout_ms, 500)
        self.assertEqual(engine.scheduler.target_count, 2)
        self.assertFalse(engine.scheduler.is_enabled)
        self.assertEqual(len(engine.batch), 0)


class _NullHandle:
    def cancel(self) -> None:
        pass


class _NullTimers:
    def now(self) -> float:
        return 0.0

    def schedule(self, delay_sec, callback):  # type: ignore[no-untyped-def]
        return _NullHandle()
