"""Grid engine: owns geometry, trail and highlight state for one grid."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from hovergrid.constants import (
    DEFAULT_CELL_SIZE,
    HIGHLIGHT_COUNT,
    HIGHLIGHT_INTERVAL_MS,
    HIGHLIGHT_JITTER_MS,
    HIGHLIGHT_MAX_DELAY_MS,
    IDLE_TIMEOUT_MS,
    TRAIL_LIMIT,
)
from hovergrid.core.geometry import CellSizeSource, GridGeometryProvider
from hovergrid.core.models import GridCell, GridFrame, GridGeometry, HighlightBatch
from hovergrid.core.projector import project, project_overlay
from hovergrid.core.scheduler import HighlightScheduler
from hovergrid.core.timers import AsyncioTimerService, TimerService
from hovergrid.core.trail import PointerTrailTracker

if TYPE_CHECKING:
    from hovergrid.config.schema import HovergridConfig

logger = logging.getLogger(__name__)

FrameListener = Callable[[GridFrame], None]

DEFAULT_TONES = ("accent-a", "accent-b", "accent-c", "accent-d")


class GridEngine:
    """Event-driven state for a pointer-reactive background grid.

    Host events (resize, pointer move, pointer leave) and timer callbacks
    mutate state through the owning component only. After every observable
    change a fresh frame is pushed to the registered listeners.
    """

    def __init__(
        self,
        timers: Optional[TimerService] = None,
        *,
        cell_size_source: Optional[CellSizeSource] = None,
        default_cell_size: float = DEFAULT_CELL_SIZE,
        trail_limit: int = TRAIL_LIMIT,
        idle_timeout_ms: int = IDLE_TIMEOUT_MS,
        tones: Sequence[str] = DEFAULT_TONES,
        highlight_count: int = HIGHLIGHT_COUNT,
        interval_ms: int = HIGHLIGHT_INTERVAL_MS,
        jitter_ms: int = HIGHLIGHT_JITTER_MS,
        max_delay_ms: int = HIGHLIGHT_MAX_DELAY_MS,
        highlights_enabled: bool = True,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._timers = timers or AsyncioTimerService()
        self._listeners: list[FrameListener] = []
        self._closed = False

        self.geometry_provider = GridGeometryProvider(cell_size_source, default_cell_size)
        self.tracker = PointerTrailTracker(
            self.geometry_provider,
            self._timers,
            trail_limit=trail_limit,
            idle_timeout_ms=idle_timeout_ms,
            on_change=self._emit,
        )
        self.scheduler = HighlightScheduler(
            self._timers,
            tones,
            target_count=highlight_count,
            interval_ms=interval_ms,
            jitter_ms=jitter_ms,
            max_delay_ms=max_delay_ms,
            rng=rng,
            on_change=self._emit,
        )
        if not highlights_enabled:
            self.scheduler.set_enabled(False)

    @classmethod
    def from_config(
        cls,
        config: HovergridConfig,
        timers: Optional[TimerService] = None,
        *,
        tones: Sequence[str] = DEFAULT_TONES,
        cell_size_source: Optional[CellSizeSource] = None,
        rng: Optional[random.Random] = None,
    ) -> GridEngine:
        """Build an engine from loaded configuration."""
        return cls(
            timers,
            cell_size_source=cell_size_source,
            default_cell_size=config.grid.cell_size,
            trail_limit=config.trail.limit,
            idle_timeout_ms=config.trail.idle_timeout_ms,
            tones=tones,
            highlight_count=config.highlights.count,
            interval_ms=config.highlights.interval_ms,
            jitter_ms=config.highlights.jitter_ms,
            max_delay_ms=config.highlights.max_delay_ms,
            highlights_enabled=config.highlights.enabled,
            rng=rng,
        )

    # --- State snapshots ---

    @property
    def geometry(self) -> GridGeometry:
        return self.geometry_provider.geometry

    @property
    def trail(self) -> tuple[GridCell, ...]:
        return self.tracker.trail

    @property
    def active_pointer(self) -> bool:
        return self.tracker.active_pointer

    @property
    def batch(self) -> HighlightBatch:
        return self.scheduler.batch

    @property
    def is_closed(self) -> bool:
        return self._closed

    def now(self) -> float:
        """Monotonic time on the engine's timer clock."""
        return self._timers.now()

    def snapshot(self) -> GridFrame:
        """Project the current state into a frame."""
        geometry = self.geometry
        batch = self.batch
        return GridFrame(
            geometry=geometry,
            cells=project(
                geometry,
                self.trail,
                self.active_pointer,
                rank_cutoff=self.tracker.trail_limit - 1,
            ),
            overlay=project_overlay(geometry, batch),
            active_pointer=self.active_pointer,
            committed_at=batch.committed_at,
        )

    # --- Listeners ---

    def add_listener(self, listener: FrameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: FrameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self) -> None:
        if self._closed or not self._listeners:
            return
        frame = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(frame)
            except Exception:
                logger.exception("Grid frame listener crashed: %r", listener)

    # --- Host events ---

    def on_resize(self, height: float, width: float) -> None:
        """Viewport resized; the cell size source is polled again."""
        if self._closed:
            return
        if self.geometry_provider.update(height, width):
            self._on_geometry_changed()

    def refresh_cell_size(self) -> None:
        """Re-read the cell size source without a viewport change."""
        if self._closed:
            return
        if self.geometry_provider.refresh():
            self._on_geometry_changed()

    def _on_geometry_changed(self) -> None:
        self.scheduler.on_geometry_change(self.geometry)
        self._emit()

    def on_pointer_move(self, x: float, y: float) -> None:
        if self._closed:
            return
        if self.tracker.on_pointer_move(x, y):
            self._emit()

    def on_pointer_leave(self) -> None:
        if self._closed:
            return
        if self.tracker.on_pointer_leave():
            self._emit()

    def set_highlights_enabled(self, enabled: bool) -> None:
        if self._closed or enabled == self.scheduler.is_enabled:
            return
        self.scheduler.set_enabled(enabled)
        self._emit()

    def close(self) -> None:
        """Cancel all pending timers and detach listeners."""
        if self._closed:
            return
        self._closed = True
        self.tracker.close()
        self.scheduler.stop()
        self._listeners.clear()
        logger.debug("Grid engine closed")
