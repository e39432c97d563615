"""Constants used across hovergrid.

User-tunable values have a matching key in the config file; these are the
defaults the config schema falls back to.
"""

# Grid geometry
DEFAULT_CELL_SIZE = 8.0  # Viewport units per cell edge
DEFAULT_CELL_ASPECT = 2.0  # Terminal rows are roughly twice as tall as columns are wide
CELL_SIZE_ENV_VAR = "HOVERGRID_CELL_SIZE"

# Pointer trail
TRAIL_LIMIT = 5
IDLE_TIMEOUT_MS = 250  # No movement for this long stops the trail animating

# Random highlights
HIGHLIGHT_COUNT = 6
HIGHLIGHT_INTERVAL_MS = 1600
HIGHLIGHT_JITTER_MS = 400  # Extra random wait before a re-rolled batch is committed
HIGHLIGHT_MAX_DELAY_MS = 600  # Upper bound for the per-cell staggered fade-in
HIGHLIGHT_PALETTE = "accents"

# Rendering (not user-configurable)
RENDER_INTERVAL_SEC = 0.1  # Repaint cadence for fade-in animations
HIGHLIGHT_FADE_SEC = 0.4  # Time a colored cell takes to reach full tone after its delay
