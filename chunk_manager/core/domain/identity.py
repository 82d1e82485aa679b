"""Utilities for deterministic chunk identities and file names."""

from __future__ import annotations

from typing import Any

from chunk_manager.core.domain.types import ChunkDate


def as_chunk_date(date: ChunkDate | dict[str, Any]) -> ChunkDate:
    """Accept a ChunkDate or its JSON-compatible mapping."""
    if isinstance(date, ChunkDate):
        return date
    return ChunkDate.model_validate(date)


def bucket_key(date: ChunkDate | dict[str, Any]) -> str:
    """Return the canonical membership key for a timestamp identity."""
    return as_chunk_date(date).key


def chunk_file_name(date: ChunkDate | dict[str, Any]) -> str:
    """Return the generated file name for a bucket identity.

    Format: ``chunk_YYYY_MM_DD_HH_mm.dat``. Month, day, hour and minute are
    zero-padded to two digits.
    """
    chunk_date = as_chunk_date(date)
    if chunk_date.minute is None:
        raise ValueError(f"file names require a bucket-level date, got {chunk_date.key}")

    return (
        f"chunk_{chunk_date.year}_{chunk_date.month:02d}_{chunk_date.day:02d}"
        f"_{chunk_date.hour:02d}_{chunk_date.minute:02d}.dat"
    )
