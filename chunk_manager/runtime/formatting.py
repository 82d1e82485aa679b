"""Display formatting for sizes, counts and labels."""

from __future__ import annotations

import math

_BYTE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def _is_valid(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def _trim(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_bytes(value: float) -> str:
    """Human-readable size using 1024-based units, e.g. ``1.5 KB``."""
    if not _is_valid(value) or value == 0:
        return "0 B"

    index = 0
    while value >= 1024 and index < len(_BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{_trim(value)} {_BYTE_UNITS[index]}"


def format_number(value: float) -> str:
    """Abbreviate large counts (K, M, B)."""
    if not _is_valid(value):
        return "0"
    if value >= 1_000_000_000:
        return f"{value / 1_000_000_000:.1f}B"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def format_with_commas(value: float) -> str:
    if not _is_valid(value):
        return "0"
    return f"{value:,}"


def format_compression_ratio(ratio: float) -> str:
    if not _is_valid(ratio):
        return "0%"
    return f"{ratio:.2f}%"


def format_hour_label(hour: int) -> str:
    return f"{hour}:00"


def format_minute_label(minute: int) -> str:
    return f"{minute:02d}"
