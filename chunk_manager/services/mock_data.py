"""Deterministic mock dataset generation."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from chunk_manager.core.domain.dataset import build_bucket, build_dataset, build_group
from chunk_manager.core.domain.types import ChunkDataset, ChunkDate

if TYPE_CHECKING:
    from chunk_manager.runtime.config import MockDataConfig


def generate_dataset(cfg: MockDataConfig) -> ChunkDataset:
    """Generate one day of hour groups with minute buckets.

    The same seed always yields the same dataset.
    """
    rng = random.Random(cfg.seed)

    groups = []
    for hour in range(cfg.hours):
        hour_date = ChunkDate(year=cfg.year, month=cfg.month, day=cfg.day, hour=hour)
        buckets = []
        for minute in range(cfg.minutes_per_hour):
            size = rng.randint(cfg.min_size, cfg.max_size)
            ratio = rng.uniform(cfg.min_compression_ratio, cfg.max_compression_ratio)
            buckets.append(
                build_bucket(
                    ChunkDate(
                        year=cfg.year,
                        month=cfg.month,
                        day=cfg.day,
                        hour=hour,
                        minute=minute,
                    ),
                    size_on_disk=size,
                    uncompressed_bytes=int(size * ratio),
                    data_count=rng.randint(cfg.min_records, cfg.max_records),
                )
            )
        groups.append(build_group(hour_date, buckets))

    return build_dataset(groups)
