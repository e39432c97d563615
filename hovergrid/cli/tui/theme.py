"""Grid colors and per-cell color resolution."""

from __future__ import annotations

from hovergrid.cli.tui.animation_colors import ColorPalette, interpolate_color
from hovergrid.constants import HIGHLIGHT_FADE_SEC
from hovergrid.core.models import CellRenderDescriptor, CellState

BACKGROUND_HEX = "#0b0d10"
CELL_HEX = "#14171c"
CELL_ALT_HEX = "#181c22"  # Checkerboard partner so cell edges stay visible
ACTIVE_HEX = "#e4e7eb"
IDLE_ACTIVE_HEX = "#8a9099"  # Last hovered cell once the pointer stops


def base_cell_color(row: int, col: int) -> str:
    return CELL_HEX if (row + col) % 2 == 0 else CELL_ALT_HEX


def trail_color(rank: int, trail_limit: int, base_hex: str) -> str:
    """Fade from the active color toward the cell color as rank grows."""
    return interpolate_color(ACTIVE_HEX, base_hex, rank / max(1, trail_limit))


def descriptor_color(descriptor: CellRenderDescriptor, active_pointer: bool, trail_limit: int) -> str:
    """Background color for a base-layer descriptor."""
    base = base_cell_color(descriptor.cell.row, descriptor.cell.col)
    if descriptor.state is CellState.ACTIVE:
        return ACTIVE_HEX if active_pointer else IDLE_ACTIVE_HEX
    if descriptor.state is CellState.TRAILING and descriptor.rank is not None:
        return trail_color(descriptor.rank, trail_limit, base)
    return base


def fade_in_progress(elapsed_sec: float, delay_sec: float, fade_sec: float = HIGHLIGHT_FADE_SEC) -> float:
    """0.0 until the delay has passed, then ramps to 1.0 over fade_sec."""
    if elapsed_sec <= delay_sec:
        return 0.0
    if fade_sec <= 0:
        return 1.0
    return min(1.0, (elapsed_sec - delay_sec) / fade_sec)


def overlay_color(
    descriptor: CellRenderDescriptor,
    palette: ColorPalette,
    elapsed_sec: float,
    base_hex: str,
) -> str | None:
    """Blend a colored cell's tone over the base color; None while still hidden."""
    if descriptor.tone is None:
        return None
    tone_hex = palette.color_for(descriptor.tone)
    if tone_hex is None:
        return None
    progress = fade_in_progress(elapsed_sec, descriptor.delay)
    if progress <= 0.0:
        return None
    return interpolate_color(base_hex, tone_hex, progress)
