"""Data models for the background grid engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class GridCell:
    """A cell addressed by its (row, col) position in the grid."""

    row: int
    col: int


@dataclass(frozen=True)
class GridGeometry:
    """Snapshot of the grid dimensions.

    Rows, cols and cell size always change together; a new snapshot replaces
    the old one instead of being patched in place.
    """

    rows: int
    cols: int
    cell_size: float

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def is_degenerate(self) -> bool:
        """True when there is no grid to draw (a zero-sized viewport)."""
        return self.total_cells == 0

    def contains(self, cell: GridCell) -> bool:
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.cols

    def cell_bounds(self, cell: GridCell) -> tuple[float, float, float]:
        """Return (top, left, size) of a cell in viewport units."""
        return cell.row * self.cell_size, cell.col * self.cell_size, self.cell_size


@dataclass(frozen=True)
class HighlightCell:
    """One randomly highlighted cell in the current batch.

    Attributes:
        cell: Grid position
        tone: Palette value the cell is tinted with
        id: Identity that stays stable across re-renders of the same batch
        delay: Seconds to wait before the cell starts animating
    """

    cell: GridCell
    tone: str
    id: str
    delay: float = 0.0


@dataclass(frozen=True)
class HighlightBatch:
    """The set of highlighted cells committed by one scheduler tick."""

    cells: tuple[HighlightCell, ...] = ()
    generation: int = 0
    committed_at: float = 0.0

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self.cells)


EMPTY_BATCH = HighlightBatch()


class CellState(str, Enum):
    """Render classification of a cell."""

    NONE = "none"
    ACTIVE = "active"
    TRAILING = "trailing"
    COLORED = "colored"


@dataclass(frozen=True)
class CellRenderDescriptor:
    """What the renderer needs to style one cell.

    Attributes:
        cell: Grid position
        state: Classification of the cell
        rank: Recency rank in the trail (0 = most recent); set for active/trailing
        tone: Palette value; set for colored overlay cells
        delay: Animation delay in seconds; set for colored overlay cells
        key: Stable identity for the renderer (highlight id or "row-col")
    """

    cell: GridCell
    state: CellState = CellState.NONE
    rank: Optional[int] = None
    tone: Optional[str] = None
    delay: float = 0.0
    key: str = ""


@dataclass(frozen=True)
class GridFrame:
    """Everything emitted to the renderer after a state change."""

    geometry: GridGeometry
    cells: list[CellRenderDescriptor] = field(default_factory=list)
    overlay: list[CellRenderDescriptor] = field(default_factory=list)
    active_pointer: bool = False
    committed_at: float = 0.0
