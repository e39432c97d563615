"""Pointer trail: the recently hovered cells, newest last."""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Callable, Deque, Optional

from hovergrid.constants import IDLE_TIMEOUT_MS, TRAIL_LIMIT
from hovergrid.core.geometry import GridGeometryProvider
from hovergrid.core.models import GridCell
from hovergrid.core.timers import TimerService, TimerSlot

logger = logging.getLogger(__name__)


class PointerTrailTracker:
    """Turns pointer positions into a bounded, idle-decaying trail of cells.

    Two observable states:
    - idle: empty trail, no last cell, pointer inactive
    - tracking: non-empty trail

    Only the immediately previous entry is deduplicated, so revisiting an
    older cell appends it again.
    """

    def __init__(
        self,
        geometry: GridGeometryProvider,
        timers: TimerService,
        trail_limit: int = TRAIL_LIMIT,
        idle_timeout_ms: int = IDLE_TIMEOUT_MS,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        if trail_limit < 1:
            raise ValueError(f"trail_limit must be at least 1, got {trail_limit}")
        self._geometry = geometry
        self.trail_limit = trail_limit
        self.idle_timeout_ms = idle_timeout_ms
        self._trail: Deque[GridCell] = deque(maxlen=trail_limit)
        self._last_cell: Optional[GridCell] = None
        self._active_pointer = False
        self._idle_slot = TimerSlot(timers, "idle")
        # Called after the idle timer mutates state (pointer events report via return value)
        self.on_change = on_change

    @property
    def trail(self) -> tuple[GridCell, ...]:
        """Read-only snapshot, oldest first."""
        return tuple(self._trail)

    @property
    def last_cell(self) -> Optional[GridCell]:
        return self._last_cell

    @property
    def active_pointer(self) -> bool:
        return self._active_pointer

    @property
    def is_tracking(self) -> bool:
        return bool(self._trail)

    @property
    def idle_timer_pending(self) -> bool:
        return self._idle_slot.pending

    def cell_at(self, x: float, y: float) -> Optional[GridCell]:
        """Map a viewport position to a grid cell, or None if it falls outside."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        cell_size = self._geometry.cell_size
        row = math.floor(y / cell_size)
        col = math.floor(x / cell_size)
        if row < 0 or col < 0:
            return None
        return GridCell(row=row, col=col)

    def on_pointer_move(self, x: float, y: float) -> bool:
        """Record a pointer position.

        Returns:
            True if observable state changed
        """
        cell = self.cell_at(x, y)
        if cell is None:
            logger.debug("Ignoring pointer outside the grid: (%s, %s)", x, y)
            return False

        changed = not self._active_pointer or cell != self._last_cell
        if not self._trail or self._trail[-1] != cell:
            # deque(maxlen) drops the oldest entry on overflow
            self._trail.append(cell)
            changed = True

        self._last_cell = cell
        self._active_pointer = True
        self._idle_slot.schedule(self.idle_timeout_ms / 1000, self._on_idle)
        return changed

    def _on_idle(self) -> None:
        """Idle timer fired: stop animating the trail but keep the last cell."""
        self._active_pointer = False
        if self._trail:
            last = self._trail[-1]
            self._trail.clear()
            self._trail.append(last)
        logger.debug("Pointer idle, trail collapsed to %s", self._last_cell)
        if self.on_change:
            self.on_change()

    def on_pointer_leave(self) -> bool:
        """Pointer left the tracked area: return to idle.

        Returns:
            True if observable state changed
        """
        self._idle_slot.cancel()
        changed = bool(self._trail) or self._last_cell is not None or self._active_pointer
        self._trail.clear()
        self._last_cell = None
        self._active_pointer = False
        return changed

    def close(self) -> None:
        """Cancel the pending idle timer."""
        self._idle_slot.cancel()
