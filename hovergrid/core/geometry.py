"""Grid geometry derived from the viewport size."""

from __future__ import annotations

import logging
import math
import os
import re
from typing import Callable, Optional

from hovergrid.constants import CELL_SIZE_ENV_VAR, DEFAULT_CELL_SIZE
from hovergrid.core.models import GridGeometry

logger = logging.getLogger(__name__)

# Zero-argument callable polled on every resize; returns the raw configured size
CellSizeSource = Callable[[], object]

# Style-variable form, e.g. "100px" or " 12.5 "
_CELL_SIZE_PATTERN = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?)\s*(?:px)?\s*$", re.IGNORECASE)


def resolve_cell_size(raw: object, default: float = DEFAULT_CELL_SIZE) -> float:
    """Turn a configured cell size into a usable positive number.

    Accepts ints, floats and numeric strings (optionally suffixed with "px").
    Anything missing, malformed, non-finite or not strictly positive falls
    back to ``default``.
    """
    value: Optional[float] = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        match = _CELL_SIZE_PATTERN.match(raw)
        if match:
            value = float(match.group(1))

    if value is None or not math.isfinite(value) or value <= 0:
        if raw is not None:
            logger.debug("Ignoring unusable cell size %r, using %s", raw, default)
        return default
    return value


def _non_negative(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def compute_geometry(viewport_height: float, viewport_width: float, cell_size: float) -> GridGeometry:
    """Compute how many cells cover the viewport.

    rows = ceil(height / cell_size), cols = ceil(width / cell_size). A
    zero-sized viewport yields a 0x0 grid.
    """
    cell_size = resolve_cell_size(cell_size)
    height = _non_negative(viewport_height)
    width = _non_negative(viewport_width)
    return GridGeometry(
        rows=math.ceil(height / cell_size),
        cols=math.ceil(width / cell_size),
        cell_size=cell_size,
    )


def env_cell_size_source(fallback: object = None, env_var: str = CELL_SIZE_ENV_VAR) -> CellSizeSource:
    """Build a source that prefers the environment variable over ``fallback``.

    The variable is read on every call so a changed theme value is picked up
    on the next resize.
    """

    def _source() -> object:
        env_value = os.getenv(env_var)
        if env_value is not None and env_value.strip():
            return env_value
        return fallback

    return _source


def static_cell_size_source(value: object) -> CellSizeSource:
    """Build a source that always returns ``value``, ignoring the environment."""
    return lambda: value


class GridGeometryProvider:
    """Owns the current grid geometry and recomputes it on resize."""

    def __init__(
        self,
        cell_size_source: CellSizeSource | None = None,
        default_cell_size: float = DEFAULT_CELL_SIZE,
    ) -> None:
        self._cell_size_source = cell_size_source or env_cell_size_source()
        self._default_cell_size = resolve_cell_size(default_cell_size)
        self._viewport: tuple[float, float] = (0.0, 0.0)
        self._geometry = GridGeometry(rows=0, cols=0, cell_size=self._default_cell_size)

    @property
    def geometry(self) -> GridGeometry:
        return self._geometry

    @property
    def cell_size(self) -> float:
        return self._geometry.cell_size

    def _poll_cell_size(self) -> float:
        try:
            raw = self._cell_size_source()
        except Exception:
            logger.exception("Cell size source failed, using default")
            return self._default_cell_size
        return resolve_cell_size(raw, self._default_cell_size)

    def update(self, viewport_height: float, viewport_width: float) -> bool:
        """Recompute geometry for a new viewport size.

        Returns:
            True if the geometry snapshot changed
        """
        self._viewport = (viewport_height, viewport_width)
        return self.refresh()

    def refresh(self) -> bool:
        """Re-poll the cell size source against the last known viewport.

        Returns:
            True if the geometry snapshot changed
        """
        height, width = self._viewport
        geometry = compute_geometry(height, width, self._poll_cell_size())
        if geometry == self._geometry:
            return False
        logger.debug(
            "Grid geometry changed: %dx%d -> %dx%d (cell size %s)",
            self._geometry.rows,
            self._geometry.cols,
            geometry.rows,
            geometry.cols,
            geometry.cell_size,
        )
        self._geometry = geometry
        return True
