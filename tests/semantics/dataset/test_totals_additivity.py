"""
Semantic test: totals are additive at every level.

Invariant:
dataset totals == sum over groups == sum over all buckets, exactly.
Compression ratios are recomputed from summed bytes, never averaged.
Bounds bracket every bucket and are attained.
"""

from __future__ import annotations

import math

import pytest

from chunk_manager.core.domain.dataset import build_dataset, build_group, dump_dataset, load_dataset

ADDITIVE_FIELDS = (
    "data_chunk_count",
    "size_on_disk",
    "compressed_bytes",
    "uncompressed_bytes",
    "data_count",
)


@pytest.fixture(params=["scenario_dataset", "generated_dataset"])
def dataset(request):
    return request.getfixturevalue(request.param)


def test_dataset_totals_equal_sum_of_groups_and_buckets(dataset) -> None:
    buckets = list(dataset.iter_buckets())
    for field in ADDITIVE_FIELDS:
        group_sum = sum(getattr(group, field) for group in dataset.groups)
        bucket_sum = sum(getattr(bucket, field) for bucket in buckets)
        assert getattr(dataset, field) == group_sum == bucket_sum


def test_group_totals_equal_sum_of_buckets(dataset) -> None:
    for group in dataset.groups:
        for field in ADDITIVE_FIELDS:
            assert getattr(group, field) == sum(getattr(b, field) for b in group.buckets)
        assert group.data_chunk_count == len(group.buckets)


def test_ratios_recomputed_from_summed_bytes(dataset) -> None:
    for group in dataset.groups:
        expected = group.uncompressed_bytes / group.compressed_bytes
        assert math.isclose(group.compression_ratio, expected)

    assert math.isclose(
        dataset.compression_ratio,
        dataset.uncompressed_bytes / dataset.compressed_bytes,
    )


def test_bounds_bracket_every_bucket(dataset) -> None:
    counts = [b.data_count for b in dataset.iter_buckets()]
    sizes = [b.size_on_disk for b in dataset.iter_buckets()]

    assert dataset.min_data_count == min(counts)
    assert dataset.max_data_count == max(counts)
    assert dataset.min_byte == min(sizes)
    assert dataset.max_byte == max(sizes)


def test_scenario_bounds(scenario_dataset) -> None:
    assert scenario_dataset.min_data_count == 5
    assert scenario_dataset.max_data_count == 20
    assert scenario_dataset.data_count == 35


def test_wire_round_trip_keeps_totals(generated_dataset) -> None:
    payload = dump_dataset(generated_dataset)

    assert "sizeOnDisk" in payload
    assert "minute" not in payload["groups"][0]["date"]

    reloaded = load_dataset(payload)
    assert reloaded == generated_dataset


def test_empty_dataset_has_zero_bounds() -> None:
    dataset = build_dataset([])
    assert dataset.groups == ()
    assert (dataset.min_data_count, dataset.max_data_count) == (0, 0)
    assert (dataset.min_byte, dataset.max_byte) == (0, 0)
    assert dataset.compression_ratio == 0.0


def test_builder_sorts_buckets_by_minute(bucket_factory) -> None:
    group = build_group(
        bucket_factory(2, 30, 1).date.hour_identity(),
        [bucket_factory(2, 30, 1), bucket_factory(2, 5, 1), bucket_factory(2, 17, 1)],
    )
    assert [b.date.minute for b in group.buckets] == [5, 17, 30]
