"""Project grid, trail and highlight state into per-cell render descriptors.

Pure functions: inputs are snapshots and are never mutated.
"""

from __future__ import annotations

from typing import Sequence

from hovergrid.constants import TRAIL_LIMIT
from hovergrid.core.models import (
    CellRenderDescriptor,
    CellState,
    GridCell,
    GridGeometry,
    HighlightBatch,
)


def _trail_ranks(trail: Sequence[GridCell]) -> dict[GridCell, int]:
    """Map each trail cell to its most recent rank (0 = newest)."""
    ranks: dict[GridCell, int] = {}
    for rank, cell in enumerate(reversed(trail)):
        ranks.setdefault(cell, rank)
    return ranks


def classify_cell(
    cell: GridCell,
    ranks: dict[GridCell, int],
    active_pointer: bool,
    rank_cutoff: int = TRAIL_LIMIT - 1,
) -> CellRenderDescriptor:
    """Base-layer classification of one cell.

    Newest trail entry -> active. Older entry within the cutoff while the
    pointer is active -> trailing(rank). Everything else -> none.
    """
    key = f"{cell.row}-{cell.col}"
    rank = ranks.get(cell)
    if rank is None:
        return CellRenderDescriptor(cell=cell, key=key)
    if rank == 0:
        return CellRenderDescriptor(cell=cell, state=CellState.ACTIVE, rank=0, key=key)
    if active_pointer and rank <= rank_cutoff:
        return CellRenderDescriptor(cell=cell, state=CellState.TRAILING, rank=rank, key=key)
    return CellRenderDescriptor(cell=cell, key=key)


def project(
    geometry: GridGeometry,
    trail: Sequence[GridCell],
    active_pointer: bool,
    rank_cutoff: int = TRAIL_LIMIT - 1,
) -> list[CellRenderDescriptor]:
    """One base-layer descriptor per grid cell, in row-major order.

    Colored cells are an independent layer, see :func:`project_overlay`.
    """
    if geometry.is_degenerate:
        return []

    ranks = _trail_ranks(trail)
    return [
        classify_cell(GridCell(row=row, col=col), ranks, active_pointer, rank_cutoff)
        for row in range(geometry.rows)
        for col in range(geometry.cols)
    ]


def project_overlay(geometry: GridGeometry, highlight_batch: HighlightBatch) -> list[CellRenderDescriptor]:
    """Colored overlay descriptors in batch order, skipping cells off the grid."""
    if geometry.is_degenerate:
        return []
    return [
        CellRenderDescriptor(
            cell=member.cell,
            state=CellState.COLORED,
            tone=member.tone,
            delay=member.delay,
            key=member.id,
        )
        for member in highlight_batch
        if geometry.contains(member.cell)
    ]
