"""Color palette management for the grid renderer.

The engine only deals in tone names ("accent-a", ...). Palettes map those
names to Rich-compatible hex colors at render time.
"""

from __future__ import annotations

from typing import Optional

# ---------------------------------------------------------------------------
# 24-bit TrueColor utilities
# ---------------------------------------------------------------------------


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Convert #RRGGBB hex string to (r, g, b) integer tuple."""
    h = hex_str.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert (r, g, b) integers to #RRGGBB string."""
    return f"#{r:02x}{g:02x}{b:02x}"


def interpolate_color(c1: str, c2: str, factor: float) -> str:
    """Linearly interpolate between two hex colors.

    Args:
        c1: Start color as #RRGGBB.
        c2: End color as #RRGGBB.
        factor: Blend factor in [0.0, 1.0]; 0.0 returns c1, 1.0 returns c2.

    Returns:
        Interpolated #RRGGBB string.
    """
    factor = max(0.0, min(1.0, factor))
    r1, g1, b1 = hex_to_rgb(c1)
    r2, g2, b2 = hex_to_rgb(c2)
    return rgb_to_hex(
        int(r1 + (r2 - r1) * factor),
        int(g1 + (g2 - g1) * factor),
        int(b1 + (b2 - b1) * factor),
    )


class ColorPalette:
    """Ordered tone names with a hex color for each."""

    def __init__(self, name: str, colors: dict[str, str]) -> None:
        if not colors:
            raise ValueError(f"Palette {name!r} needs at least one color.")
        self.name = name
        self._colors = dict(colors)

    @property
    def tones(self) -> tuple[str, ...]:
        """Tone names in cycling order."""
        return tuple(self._colors)

    def get(self, index: int) -> str:
        """Hex color for the tone at a palette index (wraps around)."""
        tones = self.tones
        return self._colors[tones[index % len(tones)]]

    def color_for(self, tone: str) -> Optional[str]:
        return self._colors.get(tone)

    def __len__(self) -> int:
        return len(self._colors)


# Four accents that read well on a dark background
_ACCENT_COLORS = {
    "accent-a": "#ff5f87",  # Pink
    "accent-b": "#5fd7ff",  # Cyan
    "accent-c": "#d7ff5f",  # Lime
    "accent-d": "#af87ff",  # Violet
}

_SPECTRUM_COLORS = {
    "red": "#ff0000",
    "yellow": "#ffff00",
    "green": "#00ff00",
    "cyan": "#00ffff",
    "blue": "#5fafff",  # Lighter, visible on dark bg
    "magenta": "#ff00ff",
}


class PaletteRegistry:
    """Registry for available color palettes."""

    def __init__(self) -> None:
        self._palettes: dict[str, ColorPalette] = {}

    def register(self, palette: ColorPalette) -> None:
        self._palettes[palette.name] = palette

    def get(self, name: str) -> Optional[ColorPalette]:
        return self._palettes.get(name)


# Global registry
palette_registry = PaletteRegistry()
palette_registry.register(ColorPalette("accents", _ACCENT_COLORS))
palette_registry.register(ColorPalette("spectrum", _SPECTRUM_COLORS))


def resolve_palette(name: str, tones: list[str] | None = None) -> ColorPalette:
    """Look up a palette by name, falling back to "accents".

    Explicit ``tones`` narrow the palette to those names (unknown names are
    dropped); if none survive, the full palette is used.
    """
    palette = palette_registry.get(name)
    if palette is None:
        palette = palette_registry.get("accents")
        assert palette is not None
    if tones:
        subset = {tone: color for tone in tones if (color := palette.color_for(tone)) is not None}
        if subset:
            return ColorPalette(palette.name, subset)
    return palette
