from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hovergrid.constants import (
    DEFAULT_CELL_ASPECT,
    DEFAULT_CELL_SIZE,
    HIGHLIGHT_COUNT,
    HIGHLIGHT_INTERVAL_MS,
    HIGHLIGHT_JITTER_MS,
    HIGHLIGHT_MAX_DELAY_MS,
    HIGHLIGHT_PALETTE,
    IDLE_TIMEOUT_MS,
    TRAIL_LIMIT,
)
from hovergrid.core.geometry import resolve_cell_size


class GridSettings(BaseModel):
    model_config = ConfigDict(extra="allow")
    cell_size: float = DEFAULT_CELL_SIZE
    cell_aspect: float = Field(default=DEFAULT_CELL_ASPECT, gt=0)

    @field_validator("cell_size", mode="before")
    @classmethod
    def coerce_cell_size(cls, v: Union[str, int, float, None]) -> float:
        """Accept style-variable forms ("8px") and fall back to the default when unusable."""
        return resolve_cell_size(v, DEFAULT_CELL_SIZE)


class TrailSettings(BaseModel):
    model_config = ConfigDict(extra="allow")
    limit: int = Field(default=TRAIL_LIMIT, ge=1)
    idle_timeout_ms: int = Field(default=IDLE_TIMEOUT_MS, ge=0)


class HighlightSettings(BaseModel):
    model_config = ConfigDict(extra="allow")
    enabled: bool = True
    count: int = Field(default=HIGHLIGHT_COUNT, ge=0)
    interval_ms: int = Field(default=HIGHLIGHT_INTERVAL_MS, gt=0)
    jitter_ms: int = Field(default=HIGHLIGHT_JITTER_MS, ge=0)
    max_delay_ms: int = Field(default=HIGHLIGHT_MAX_DELAY_MS, ge=0)
    palette: str = HIGHLIGHT_PALETTE
    # Explicit tones override the named palette's tone list
    tones: List[str] = []


class HovergridConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    grid: GridSettings = GridSettings()
    trail: TrailSettings = TrailSettings()
    highlights: HighlightSettings = HighlightSettings()
