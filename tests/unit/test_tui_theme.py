"""Unit tests for grid palettes and color resolution."""

import pytest

from hovergrid.cli.tui.animation_colors import (
    ColorPalette,
    interpolate_color,
    palette_registry,
    resolve_palette,
)
from hovergrid.cli.tui.theme import (
    ACTIVE_HEX,
    IDLE_ACTIVE_HEX,
    base_cell_color,
    descriptor_color,
    fade_in_progress,
    overlay_color,
)
from hovergrid.core.models import CellRenderDescriptor, CellState, GridCell


def test_accent_palette_cycles_tones() -> None:
    palette = palette_registry.get("accents")
    assert palette is not None
    assert palette.tones == ("accent-a", "accent-b", "accent-c", "accent-d")
    assert palette.get(4) == palette.get(0)
    assert len(palette) == 4


def test_resolve_palette_falls_back_and_narrows() -> None:
    assert resolve_palette("does-not-exist").name == "accents"
    narrowed = resolve_palette("spectrum", ["red", "blue", "plaid"])
    assert narrowed.tones == ("red", "blue")
    assert resolve_palette("spectrum", ["plaid"]).tones == palette_registry.get("spectrum").tones


def test_empty_palette_rejected() -> None:
    with pytest.raises(ValueError):
        ColorPalette("empty", {})


def test_interpolate_color_endpoints() -> None:
    assert interpolate_color("#000000", "#ffffff", 0.0) == "#000000"
    assert interpolate_color("#000000", "#ffffff", 1.0) == "#ffffff"
    assert interpolate_color("#000000", "#ffffff", 2.0) == "#ffffff"
    assert interpolate_color("#000000", "#646464", 0.5) == "#323232"


def test_descriptor_colors() -> None:
    cell = GridCell(1, 2)
    base = base_cell_color(1, 2)
    assert descriptor_color(CellRenderDescriptor(cell), True, 5) == base
    active = CellRenderDescriptor(cell, CellState.ACTIVE, rank=0)
    assert descriptor_color(active, True, 5) == ACTIVE_HEX
    assert descriptor_color(active, False, 5) == IDLE_ACTIVE_HEX

    near = descriptor_color(CellRenderDescriptor(cell, CellState.TRAILING, rank=1), True, 5)
    far = descriptor_color(CellRenderDescriptor(cell, CellState.TRAILING, rank=4), True, 5)
    assert near not in (far, base, ACTIVE_HEX)


def test_checkerboard_base_colors() -> None:
    assert base_cell_color(0, 0) == base_cell_color(1, 1)
    assert base_cell_color(0, 0) != base_cell_color(0, 1)


@pytest.mark.parametrize(
    ("elapsed", "delay", "expected"),
    [(0.0, 0.0, 0.0), (0.2, 0.0, 0.5), (0.5, 0.0, 1.0), (0.3, 0.5, 0.0), (0.7, 0.5, 0.5)],
)
def test_fade_in_progress(elapsed, delay, expected) -> None:
    assert fade_in_progress(elapsed, delay, fade_sec=0.4) == pytest.approx(expected)


def test_overlay_color_waits_for_delay() -> None:
    palette = resolve_palette("accents")
    descriptor = CellRenderDescriptor(GridCell(0, 0), CellState.COLORED, tone="accent-b", delay=0.3)
    assert overlay_color(descriptor, palette, 0.1, "#000000") is None
    assert overlay_color(descriptor, palette, 5.0, "#000000") == palette.color_for("accent-b")


def test_overlay_color_unknown_tone() -> None:
    descriptor = CellRenderDescriptor(GridCell(0, 0), CellState.COLORED, tone="mystery")
    assert overlay_color(descriptor, resolve_palette("accents"), 5.0, "#000000") is None
