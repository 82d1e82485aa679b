"""Shared dataset fixtures for the semantic test suite."""

from __future__ import annotations

from typing import Callable

import pytest

from chunk_manager.core.domain.dataset import build_bucket, build_dataset, build_group
from chunk_manager.core.domain.types import Bucket, ChunkDataset, ChunkDate
from chunk_manager.runtime.config import MockDataConfig
from chunk_manager.services.mock_data import generate_dataset

YEAR, MONTH, DAY = 2024, 3, 5


def bucket_date(hour: int, minute: int) -> ChunkDate:
    return ChunkDate(year=YEAR, month=MONTH, day=DAY, hour=hour, minute=minute)


def hour_date(hour: int) -> ChunkDate:
    return ChunkDate(year=YEAR, month=MONTH, day=DAY, hour=hour)


def make_bucket(hour: int, minute: int, data_count: int, size: int = 1000) -> Bucket:
    return build_bucket(
        bucket_date(hour, minute),
        size_on_disk=size,
        uncompressed_bytes=size * 3,
        data_count=data_count,
    )


@pytest.fixture
def bucket_factory() -> Callable[..., Bucket]:
    return make_bucket


@pytest.fixture
def scenario_dataset() -> ChunkDataset:
    """Hour 0 with minutes {0, 1} (10 and 20 records), hour 1 with minute 0 (5 records)."""
    return build_dataset(
        [
            build_group(
                hour_date(0),
                [make_bucket(0, 0, 10, size=100), make_bucket(0, 1, 20, size=200)],
            ),
            build_group(hour_date(1), [make_bucket(1, 0, 5, size=50)]),
        ]
    )


@pytest.fixture
def generated_dataset() -> ChunkDataset:
    """Small generated dataset (4 hours x 15 minutes)."""
    return generate_dataset(
        MockDataConfig(seed=11, year=YEAR, month=MONTH, day=DAY, hours=4, minutes_per_hour=15)
    )
