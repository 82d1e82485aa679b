"""Density-to-color mapping for the chunk heatmap.

Record counts are min-max normalized against the dataset bounds and mapped
onto a fixed 8-level green palette, light (low density) to dark (high
density). Everything here is pure and stateless.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chunk_manager.core.domain.types import Bucket, ChunkDataset


# Level 0 is the lightest (lowest data), level 7 the darkest (highest data).
GREEN_PALETTE: tuple[str, ...] = (
    "#e8f5e9",
    "#c8e6c9",
    "#a5d6a7",
    "#81c784",
    "#66bb6a",
    "#4caf50",
    "#388e3c",
    "#1b5e20",
)

LEVEL_COUNT = len(GREEN_PALETTE)
MIDDLE_LEVEL = 4

EMPTY_CELL = "#f5f5f5"

EMPTY_TEXT = "#6b7280"
DARK_TEXT = "#1a1a1a"
LIGHT_TEXT = "#ffffff"

# The four lightest palette entries carry dark text, the four darkest light text.
_LIGHT_BACKGROUNDS: frozenset[str] = frozenset(GREEN_PALETTE[:4])

MINUTES_PER_HOUR = 60


def color_level(data_count: float, min_data_count: float, max_data_count: float) -> int:
    """Map a count onto levels 0..7 by linear min-max scaling.

    A degenerate range (min == max) renders at the middle level.
    """
    if min_data_count == max_data_count:
        return MIDDLE_LEVEL

    normalized = (data_count - min_data_count) / (max_data_count - min_data_count)
    level = math.floor(normalized * LEVEL_COUNT)
    return max(0, min(LEVEL_COUNT - 1, level))


def bucket_color(bucket: Bucket | None, min_data_count: float, max_data_count: float) -> str:
    """Background color for a heatmap cell."""
    if bucket is None or bucket.data_count == 0:
        return EMPTY_CELL

    return GREEN_PALETTE[color_level(bucket.data_count, min_data_count, max_data_count)]


def text_color(background_color: str) -> str:
    """Foreground color that stays readable on the given background."""
    if background_color == EMPTY_CELL:
        return EMPTY_TEXT
    if background_color in _LIGHT_BACKGROUNDS:
        return DARK_TEXT
    return LIGHT_TEXT


def palette_colors() -> list[str]:
    """All palette colors for the legend, light to dark."""
    return list(GREEN_PALETTE)


def color_by_level(level: int) -> str:
    if level < 0 or level >= LEVEL_COUNT:
        return EMPTY_CELL
    return GREEN_PALETTE[level]


# ---------------------------------------------------------------------------
# Heatmap rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HeatmapCell:
    minute: int
    level: int | None  # None for an empty cell
    background: str
    foreground: str
    data_count: int


@dataclass(frozen=True, slots=True)
class HeatmapRow:
    hour: int
    cells: tuple[HeatmapCell, ...]


def heatmap_rows(dataset: ChunkDataset) -> list[HeatmapRow]:
    """Build one row per group with a cell for every minute of the hour.

    Uses the bounds carried by the dataset; they are not recomputed here.
    """
    low = dataset.min_data_count
    high = dataset.max_data_count

    rows: list[HeatmapRow] = []
    for group in dataset.groups:
        by_minute = {bucket.date.minute: bucket for bucket in group.buckets}
        cells = []
        for minute in range(MINUTES_PER_HOUR):
            bucket = by_minute.get(minute)
            background = bucket_color(bucket, low, high)
            level = None
            if background != EMPTY_CELL and bucket is not None:
                level = color_level(bucket.data_count, low, high)
            cells.append(
                HeatmapCell(
                    minute=minute,
                    level=level,
                    background=background,
                    foreground=text_color(background),
                    data_count=0 if bucket is None else bucket.data_count,
                )
            )
        rows.append(HeatmapRow(hour=group.hour, cells=tuple(cells)))
    return rows
