"""Drive the Textual grid app headlessly."""

import random

import pytest

from hovergrid.cli.tui.app import GridApp
from hovergrid.cli.tui.widgets.grid_background import GridBackground
from hovergrid.cli.tui.widgets.status_bar import StatusBar
from hovergrid.config.schema import HovergridConfig
from hovergrid.core.models import GridCell

pytestmark = pytest.mark.integration


def _app() -> GridApp:
    # Long idle timeout so the trail does not decay between pilot steps
    config = HovergridConfig.model_validate({"grid": {"cell_size": 8}, "trail": {"idle_timeout_ms": 60000}})
    return GridApp(config, cell_size_source=lambda: None, rng=random.Random(3))


@pytest.mark.asyncio
async def test_grid_mounts_with_highlights():
    app = _app()
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        engine = app.engine
        assert not engine.geometry.is_degenerate
        assert engine.geometry.cols == 10
        assert len(engine.batch) == 6

        grid = app.query_one(GridBackground)
        assert grid.frame.geometry == engine.geometry

    assert engine.is_closed


@pytest.mark.asyncio
async def test_mouse_moves_build_trail_and_leave_clears_it():
    app = _app()
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        engine = app.engine

        # Column 3 -> x 3.5 -> col 0; row 1 -> y (1.5 * 2) = 3 -> row 0
        await pilot.hover(GridBackground, offset=(3, 1))
        await pilot.pause()
        assert engine.trail == (GridCell(0, 0),)

        # Column 12 -> x 12.5 -> col 1; row 5 -> y (5.5 * 2) = 11 -> row 1
        await pilot.hover(GridBackground, offset=(12, 5))
        await pilot.pause()
        assert engine.trail == (GridCell(0, 0), GridCell(1, 1))
        assert engine.active_pointer
        assert app.query_one(StatusBar).trail_length == 2

        await pilot.hover(StatusBar)
        await pilot.pause()
        assert engine.trail == ()
        assert not engine.active_pointer


@pytest.mark.asyncio
async def test_toggle_highlights_binding():
    app = _app()
    async with app.run_test(size=(80, 24)) as pilot:
        await pilot.pause()
        await pilot.press("h")
        await pilot.pause()
        assert not app.engine.scheduler.is_enabled
        assert len(app.engine.batch) == 0
        assert app.query_one(StatusBar).highlights_enabled is False

        await pilot.press("h")
        await pilot.pause()
        assert app.engine.scheduler.is_enabled
        assert len(app.engine.batch) == 6
