"""Dataset construction and derivation helpers.

Totals and bounds are always derived from children. Providers that assemble
a dataset in-process should use these builders; providers that deliver JSON
are checked by the model validators in ``types``.
"""

from __future__ import annotations

from typing import Any, Iterable

from chunk_manager.core.domain.types import (
    Bucket,
    ChunkDataset,
    ChunkDate,
    ChunkGroup,
    compression_ratio,
)


def build_bucket(
    date: ChunkDate,
    *,
    size_on_disk: int,
    uncompressed_bytes: int,
    data_count: int,
    compressed_bytes: int | None = None,
) -> Bucket:
    """Create a bucket, deriving the compression ratio.

    compressed_bytes defaults to size_on_disk.
    """
    compressed = size_on_disk if compressed_bytes is None else compressed_bytes
    return Bucket(
        date=date,
        size_on_disk=size_on_disk,
        compressed_bytes=compressed,
        uncompressed_bytes=uncompressed_bytes,
        compression_ratio=compression_ratio(uncompressed_bytes, compressed),
        data_count=data_count,
    )


def _sum_totals(children: Iterable[Bucket] | Iterable[ChunkGroup]) -> dict[str, Any]:
    totals = {
        "data_chunk_count": 0,
        "size_on_disk": 0,
        "compressed_bytes": 0,
        "uncompressed_bytes": 0,
        "data_count": 0,
    }
    for child in children:
        for field in totals:
            totals[field] += getattr(child, field)

    totals["compression_ratio"] = compression_ratio(
        totals["uncompressed_bytes"], totals["compressed_bytes"]
    )
    return totals


def build_group(date: ChunkDate, buckets: Iterable[Bucket]) -> ChunkGroup:
    """Create an hour group; buckets are sorted by minute."""
    ordered = sorted(buckets, key=lambda bucket: bucket.date.minute or 0)
    return ChunkGroup(date=date.hour_identity(), buckets=ordered, **_sum_totals(ordered))


def compute_bounds(groups: Iterable[ChunkGroup]) -> dict[str, int]:
    """Return min/max record count and min/max size over all buckets."""
    buckets = [bucket for group in groups for bucket in group.buckets]
    if not buckets:
        return {"min_data_count": 0, "max_data_count": 0, "min_byte": 0, "max_byte": 0}

    counts = [bucket.data_count for bucket in buckets]
    sizes = [bucket.size_on_disk for bucket in buckets]
    return {
        "min_data_count": min(counts),
        "max_data_count": max(counts),
        "min_byte": min(sizes),
        "max_byte": max(sizes),
    }


def build_dataset(groups: Iterable[ChunkGroup]) -> ChunkDataset:
    """Create the dataset root. Bounds are computed once, here."""
    group_list = list(groups)
    return ChunkDataset(
        groups=group_list,
        **_sum_totals(group_list),
        **compute_bounds(group_list),
    )


def load_dataset(payload: dict[str, Any]) -> ChunkDataset:
    """Validate a JSON-compatible dataset payload (camelCase wire names)."""
    return ChunkDataset.model_validate(payload)


def dump_dataset(dataset: ChunkDataset) -> dict[str, Any]:
    """Return the JSON-compatible wire form of a dataset."""
    return dataset.model_dump(mode="json", by_alias=True, exclude_none=True)


def total_bucket_count(dataset: ChunkDataset) -> int:
    return sum(len(group.buckets) for group in dataset.groups)
