"""
Semantic test: cell background and foreground colors.

Invariant:
Absent or empty buckets render with the neutral empty color. The four
lightest palette colors (and the empty color) pair with dark text; the four
darkest pair with light text.
"""

from __future__ import annotations

from chunk_manager.core.color.density import (
    DARK_TEXT,
    EMPTY_CELL,
    EMPTY_TEXT,
    GREEN_PALETTE,
    LIGHT_TEXT,
    bucket_color,
    color_by_level,
    heatmap_rows,
    palette_colors,
    text_color,
)


def test_absent_and_zero_buckets_are_empty(bucket_factory) -> None:
    assert bucket_color(None, 0, 100) == EMPTY_CELL
    assert bucket_color(bucket_factory(0, 0, data_count=0), 0, 100) == EMPTY_CELL
    assert EMPTY_CELL not in GREEN_PALETTE


def test_bucket_color_follows_level(bucket_factory) -> None:
    assert bucket_color(bucket_factory(0, 0, data_count=100), 0, 100) == GREEN_PALETTE[7]
    assert bucket_color(bucket_factory(0, 0, data_count=1), 0, 100) == GREEN_PALETTE[0]
    assert bucket_color(bucket_factory(0, 0, data_count=50), 50, 50) == GREEN_PALETTE[4]


def test_text_color_split() -> None:
    assert text_color(EMPTY_CELL) == EMPTY_TEXT
    for color in GREEN_PALETTE[:4]:
        assert text_color(color) == DARK_TEXT
    for color in GREEN_PALETTE[4:]:
        assert text_color(color) == LIGHT_TEXT


def test_palette_export_is_a_copy_in_order() -> None:
    colors = palette_colors()
    assert colors == list(GREEN_PALETTE)
    assert len(colors) == 8

    colors.clear()
    assert len(palette_colors()) == 8


def test_color_by_level_out_of_range_is_empty() -> None:
    assert color_by_level(0) == GREEN_PALETTE[0]
    assert color_by_level(7) == GREEN_PALETTE[7]
    assert color_by_level(-1) == EMPTY_CELL
    assert color_by_level(8) == EMPTY_CELL


def test_heatmap_rows_cover_every_minute(scenario_dataset) -> None:
    rows = heatmap_rows(scenario_dataset)

    assert [row.hour for row in rows] == [0, 1]
    assert all(len(row.cells) == 60 for row in rows)

    first = rows[0].cells
    # bounds are 5..20: 10 -> floor(5/15*8)=2, 20 -> 7
    assert first[0].level == 2
    assert first[1].level == 7
    assert first[2].level is None
    assert first[2].background == EMPTY_CELL
    assert first[1].foreground == LIGHT_TEXT
    assert rows[1].cells[0].level == 0
