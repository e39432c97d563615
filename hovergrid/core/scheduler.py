"""Random highlight scheduler.

Every refresh interval a new batch of distinct cells is drawn, each tinted
with the next palette tone. The commit of a drawn batch is delayed by a
random jitter so refreshes are not perfectly periodic. A tick that fires
while a jittered commit is still pending replaces it.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional, Sequence

from hovergrid.constants import (
    HIGHLIGHT_COUNT,
    HIGHLIGHT_INTERVAL_MS,
    HIGHLIGHT_JITTER_MS,
    HIGHLIGHT_MAX_DELAY_MS,
)
from hovergrid.core.models import EMPTY_BATCH, GridCell, GridGeometry, HighlightBatch, HighlightCell
from hovergrid.core.timers import TimerService, TimerSlot

logger = logging.getLogger(__name__)


def _member_id(generation: int, index: int, rng: random.Random) -> str:
    return f"{generation}-{index}-{rng.getrandbits(32):08x}"


def select_batch(
    geometry: GridGeometry,
    target_count: int,
    palette: Sequence[str],
    rng: Optional[random.Random] = None,
    max_delay_sec: float = 0.0,
    generation: int = 0,
    committed_at: float = 0.0,
) -> HighlightBatch:
    """Draw min(target_count, rows*cols) distinct cells at random.

    Rejection sampling: a drawn cell already in the batch is discarded and
    redrawn. The target is capped at the cell count before the loop, so the
    loop always terminates.

    Args:
        geometry: Current grid
        target_count: Desired batch size
        palette: Tones assigned cyclically in selection order
        rng: Random source (module-level random when omitted)
        max_delay_sec: Upper bound for each member's animation delay
        generation: Batch counter, used in member ids
        committed_at: Monotonic time the batch takes effect

    Returns:
        A new batch; empty for a degenerate grid, empty palette or
        non-positive target
    """
    rng = rng or random.Random()
    if geometry.is_degenerate or not palette or target_count <= 0:
        return HighlightBatch(cells=(), generation=generation, committed_at=committed_at)

    count = min(target_count, geometry.total_cells)
    used: set[GridCell] = set()
    members: list[HighlightCell] = []

    while len(members) < count:
        cell = GridCell(row=rng.randrange(geometry.rows), col=rng.randrange(geometry.cols))
        if cell in used:
            continue
        used.add(cell)

        index = len(members)
        members.append(
            HighlightCell(
                cell=cell,
                tone=palette[index % len(palette)],
                id=_member_id(generation, index, rng),
                delay=rng.uniform(0.0, max_delay_sec) if max_delay_sec > 0 else 0.0,
            )
        )

    return HighlightBatch(cells=tuple(members), generation=generation, committed_at=committed_at)


class HighlightScheduler:
    """Keeps a refreshing batch of decorative highlighted cells.

    Independent of pointer state. Uses two timer slots: ``tick`` for the
    fixed cadence and ``commit`` for the jittered commit of a drawn batch.
    """

    def __init__(
        self,
        timers: TimerService,
        palette: Sequence[str],
        target_count: int = HIGHLIGHT_COUNT,
        interval_ms: int = HIGHLIGHT_INTERVAL_MS,
        jitter_ms: int = HIGHLIGHT_JITTER_MS,
        max_delay_ms: int = HIGHLIGHT_MAX_DELAY_MS,
        rng: Optional[random.Random] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._timers = timers
        self.palette = tuple(palette)
        self.target_count = target_count
        self.interval_ms = interval_ms
        self.jitter_ms = max(0, jitter_ms)
        self.max_delay_ms = max(0, max_delay_ms)
        self.rng = rng or random.Random()
        # Called after a timer-driven commit replaces the batch
        self.on_change = on_change

        self._geometry = GridGeometry(rows=0, cols=0, cell_size=1.0)
        self._batch: HighlightBatch = EMPTY_BATCH
        self._generation = 0
        self._enabled = True
        self._tick_slot = TimerSlot(timers, "tick")
        self._commit_slot = TimerSlot(timers, "commit")

    @property
    def batch(self) -> HighlightBatch:
        return self._batch

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def is_running(self) -> bool:
        """True while the refresh cadence is scheduled."""
        return self._tick_slot.pending

    @property
    def commit_pending(self) -> bool:
        return self._commit_slot.pending

    def _draw(self) -> HighlightBatch:
        self._generation += 1
        return select_batch(
            self._geometry,
            self.target_count,
            self.palette,
            rng=self.rng,
            max_delay_sec=self.max_delay_ms / 1000,
            generation=self._generation,
            committed_at=self._timers.now(),
        )

    def _commit(self, batch: HighlightBatch) -> None:
        self._batch = batch
        logger.debug("Committed highlight batch %d with %d cells", batch.generation, len(batch))

    def _schedule_tick(self) -> None:
        self._tick_slot.schedule(self.interval_ms / 1000, self._on_tick)

    def _on_tick(self) -> None:
        self._schedule_tick()
        jitter_sec = self.rng.uniform(0.0, self.jitter_ms / 1000) if self.jitter_ms else 0.0
        # An earlier jittered commit still pending is replaced by this one
        self._commit_slot.schedule(jitter_sec, self._on_commit)

    def _on_commit(self) -> None:
        if self._geometry.is_degenerate or not self._enabled:
            return
        self._commit(self._draw())
        if self.on_change:
            self.on_change()

    def on_geometry_change(self, geometry: GridGeometry) -> None:
        """Discard the old batch and recompute immediately.

        Stale coordinates may be out of bounds after a resize. A degenerate
        grid leaves the scheduler paused with an empty batch.
        """
        self._geometry = geometry
        self.stop()
        if geometry.is_degenerate or not self._enabled:
            self._commit(HighlightBatch(generation=self._generation, committed_at=self._timers.now()))
            return
        self._commit(self._draw())
        self._schedule_tick()

    def set_enabled(self, enabled: bool) -> None:
        """Turn random highlights on or off; the batch is recomputed either way."""
        if enabled == self._enabled:
            return
        self._enabled = enabled
        logger.debug("Highlight scheduler %s", "enabled" if enabled else "disabled")
        self.on_geometry_change(self._geometry)

    def stop(self) -> None:
        """Cancel the cadence and any pending jittered commit."""
        self._tick_slot.cancel()
        self._commit_slot.cancel()
