"""Status bar showing grid size, trail length and highlight state."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from hovergrid.cli.tui.base import GridMixin
from hovergrid.core.models import GridFrame


class StatusBar(GridMixin, Widget):
    """One-line summary of the current grid frame."""

    DEFAULT_CSS = """
    StatusBar {
        width: 100%;
        height: 1;
        background: $panel;
    }
    """

    grid_size = reactive("0x0")
    trail_length = reactive(0)
    pointer_active = reactive(False)
    highlights = reactive(0)
    highlights_enabled = reactive(True)

    def update_from_frame(self, frame: GridFrame, highlights_enabled: bool) -> None:
        self.grid_size = f"{frame.geometry.rows}x{frame.geometry.cols}"
        self.trail_length = sum(1 for d in frame.cells if d.rank is not None)
        self.pointer_active = frame.active_pointer
        self.highlights = len(frame.overlay)
        self.highlights_enabled = highlights_enabled

    def render(self) -> Text:
        text = Text(no_wrap=True)
        text.append(" grid ", style="dim")
        text.append(self.grid_size, style="bold")
        text.append(" | trail ", style="dim")
        text.append(str(self.trail_length), style="bold")
        text.append(" ●" if self.pointer_active else " ○", style="cyan")
        text.append(" | highlights ", style="dim")
        if self.highlights_enabled:
            text.append(str(self.highlights), style="bold magenta")
        else:
            text.append("off", style="dim")
        text.append("   [h] toggle highlights  [q] quit", style="dim")
        return text
