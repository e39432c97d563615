"""Textual app hosting the pointer-reactive grid."""

from __future__ import annotations

import logging
import random
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding

from hovergrid.cli.tui.animation_colors import resolve_palette
from hovergrid.cli.tui.widgets.grid_background import GridBackground
from hovergrid.cli.tui.widgets.status_bar import StatusBar
from hovergrid.config.schema import HovergridConfig
from hovergrid.core.engine import GridEngine
from hovergrid.core.geometry import CellSizeSource, env_cell_size_source
from hovergrid.core.models import GridFrame
from hovergrid.core.timers import TimerService

logger = logging.getLogger(__name__)


class GridApp(App[None]):
    """Full-screen grid with a status line."""

    BINDINGS = [
        Binding("h", "toggle_highlights", "Highlights"),
        Binding("r", "reload_cell_size", "Reload cell size"),
        Binding("q", "quit", "Quit", priority=True),
        Binding("escape", "quit", "Quit", show=False),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }
    #grid {
        height: 1fr;
    }
    """

    def __init__(
        self,
        config: Optional[HovergridConfig] = None,
        *,
        timers: Optional[TimerService] = None,
        cell_size_source: Optional[CellSizeSource] = None,
        rng: Optional[random.Random] = None,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.grid_config = config or HovergridConfig()
        self.palette = resolve_palette(self.grid_config.highlights.palette, self.grid_config.highlights.tones)
        self.engine = GridEngine.from_config(
            self.grid_config,
            timers,
            tones=self.palette.tones,
            cell_size_source=cell_size_source or env_cell_size_source(self.grid_config.grid.cell_size),
            rng=rng,
        )

    def compose(self) -> ComposeResult:
        yield GridBackground(
            self.engine,
            palette=self.palette,
            cell_aspect=self.grid_config.grid.cell_aspect,
            id="grid",
        )
        yield StatusBar(id="status")

    def on_mount(self) -> None:
        self.engine.add_listener(self._on_frame)
        self._on_frame(self.engine.snapshot())

    def _on_frame(self, frame: GridFrame) -> None:
        self.query_one(StatusBar).update_from_frame(frame, self.engine.scheduler.is_enabled)

    def action_toggle_highlights(self) -> None:
        enabled = not self.engine.scheduler.is_enabled
        self.engine.set_highlights_enabled(enabled)
        logger.debug("Highlights toggled to %s", enabled)

    def action_reload_cell_size(self) -> None:
        """Re-read the cell size source (e.g. after changing HOVERGRID_CELL_SIZE)."""
        self.engine.refresh_cell_size()
