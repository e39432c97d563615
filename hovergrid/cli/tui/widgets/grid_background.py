"""Full-screen grid widget driven by the grid engine."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from rich.style import Style
from rich.text import Text
from textual import events
from textual.widget import Widget

from hovergrid.cli.tui.animation_colors import ColorPalette, resolve_palette
from hovergrid.cli.tui.base import GridMixin
from hovergrid.cli.tui.theme import (
    BACKGROUND_HEX,
    base_cell_color,
    descriptor_color,
    overlay_color,
)
from hovergrid.constants import DEFAULT_CELL_ASPECT, HIGHLIGHT_FADE_SEC, RENDER_INTERVAL_SEC
from hovergrid.core.models import CellState, GridCell, GridFrame

if TYPE_CHECKING:
    from textual.timer import Timer

    from hovergrid.core.engine import GridEngine

logger = logging.getLogger(__name__)


class GridBackground(GridMixin, Widget):
    """Renders the engine's frames as colored blocks.

    Terminal cells are not square, so vertical positions are scaled by
    ``cell_aspect`` before they reach the engine: the engine sees a viewport
    of ``height * cell_aspect`` by ``width`` units.
    """

    DEFAULT_CSS = """
    GridBackground {
        width: 100%;
        height: 100%;
    }
    """

    def __init__(
        self,
        engine: GridEngine,
        palette: Optional[ColorPalette] = None,
        cell_aspect: float = DEFAULT_CELL_ASPECT,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.engine = engine
        self.palette = palette or resolve_palette("accents")
        self.cell_aspect = cell_aspect if cell_aspect > 0 else DEFAULT_CELL_ASPECT
        self.frame: GridFrame = engine.snapshot()
        self._render_timer: Timer | None = None

    # --- Lifecycle ---

    def on_mount(self) -> None:
        self.engine.add_listener(self._on_frame)
        self._sync_viewport(self.size.width, self.size.height)
        self._render_timer = self.set_interval(RENDER_INTERVAL_SEC, self._on_render_tick)

    def on_unmount(self) -> None:
        if self._render_timer is not None:
            self._render_timer.stop()
            self._render_timer = None
        self.engine.remove_listener(self._on_frame)
        self.engine.close()

    # --- Host events -> engine ---

    def _sync_viewport(self, width: int, height: int) -> None:
        self.engine.on_resize(height * self.cell_aspect, width)
        self.frame = self.engine.snapshot()
        self.refresh()

    def on_resize(self, event: events.Resize) -> None:
        self._sync_viewport(event.size.width, event.size.height)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        # Sample the middle of the terminal cell
        self.engine.on_pointer_move(event.x + 0.5, (event.y + 0.5) * self.cell_aspect)

    def on_leave(self, _event: events.Leave) -> None:
        self.engine.on_pointer_leave()

    def _on_frame(self, frame: GridFrame) -> None:
        self.frame = frame
        self.refresh()

    def _on_render_tick(self) -> None:
        """Repaint while overlay cells are still fading in."""
        if not self.frame.overlay:
            return
        elapsed = self.engine.now() - self.frame.committed_at
        longest = max(d.delay for d in self.frame.overlay) + HIGHLIGHT_FADE_SEC
        if elapsed <= longest + RENDER_INTERVAL_SEC:
            self.refresh()

    # --- Rendering ---

    def cell_colors(self) -> dict[GridCell, str]:
        """Resolve the background color of every non-default cell in the current frame."""
        frame = self.frame
        colors: dict[GridCell, str] = {}
        elapsed = self.engine.now() - frame.committed_at
        for descriptor in frame.overlay:
            base = base_cell_color(descriptor.cell.row, descriptor.cell.col)
            color = overlay_color(descriptor, self.palette, elapsed, base)
            if color is not None:
                colors[descriptor.cell] = color
        # Pointer states sit above the colored layer
        trail_limit = self.engine.tracker.trail_limit
        for descriptor in frame.cells:
            if descriptor.state is not CellState.NONE:
                colors[descriptor.cell] = descriptor_color(descriptor, frame.active_pointer, trail_limit)
        return colors

    def render(self) -> Text:
        try:
            return self._render_grid()
        except Exception:
            logger.exception("Grid render crashed")
            return Text("")

    def _render_grid(self) -> Text:
        result = Text(no_wrap=True)
        geometry = self.frame.geometry
        width = self.size.width
        height = self.size.height
        if geometry.is_degenerate or width <= 0 or height <= 0:
            return result

        colors = self.cell_colors()
        cell_size = geometry.cell_size

        for y in range(height):
            if y > 0:
                result.append("\n")
            row = math.floor((y + 0.5) * self.cell_aspect / cell_size)
            run_color: str | None = None
            run_length = 0
            for x in range(width):
                cell = GridCell(row=row, col=math.floor((x + 0.5) / cell_size))
                color = colors.get(cell) or base_cell_color(cell.row, cell.col)
                if color == run_color:
                    run_length += 1
                    continue
                if run_length:
                    result.append(" " * run_length, style=Style(bgcolor=run_color))
                run_color = color
                run_length = 1
            if run_length:
                result.append(" " * run_length, style=Style(bgcolor=run_color or BACKGROUND_HEX))

        return result
