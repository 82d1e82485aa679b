"""
Semantic test: density level is monotone and bounded.

Invariant:
For min < max, color_level(count, min, max) is non-decreasing in count and
always within [0, 7]. A degenerate range maps every count to level 4.
"""

from __future__ import annotations

import pytest

from chunk_manager.core.color.density import MIDDLE_LEVEL, color_level


@pytest.mark.parametrize(
    ("low", "high"),
    [(0, 1), (0, 7), (5, 20), (100, 5000), (3, 1_000_000)],
)
def test_level_monotone_and_in_range(low: int, high: int) -> None:
    step = max(1, (high - low) // 500)
    previous = -1
    for count in range(low, high + 1, step):
        level = color_level(count, low, high)
        assert 0 <= level <= 7
        assert level >= previous
        previous = level

    assert color_level(low, low, high) == 0
    assert color_level(high, low, high) == 7


@pytest.mark.parametrize("count", [0, 1, 5, 999])
@pytest.mark.parametrize("bound", [0, 5, 42])
def test_degenerate_range_is_middle_level(count: int, bound: int) -> None:
    assert color_level(count, bound, bound) == MIDDLE_LEVEL == 4


def test_linear_scaling_boundaries() -> None:
    # (count - 0) / 80 * 8 -> one level per 10 records
    assert color_level(9, 0, 80) == 0
    assert color_level(10, 0, 80) == 1
    assert color_level(79, 0, 80) == 7
    assert color_level(80, 0, 80) == 7


def test_out_of_range_counts_are_clamped() -> None:
    assert color_level(-50, 0, 80) == 0
    assert color_level(500, 0, 80) == 7
