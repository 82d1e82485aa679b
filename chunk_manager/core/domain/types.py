"""Core shared data models and schemas.

This module defines the canonical Pydantic models exchanged with chunk
services: timestamp identities, minute buckets, hour groups, the dataset
root, and the download/delete result payloads. Wire names are camelCase;
Python attribute names are snake_case.

The models are frozen. A dataset is loaded once per session and must not be
mutated afterwards.
"""

# pylint: disable=line-too-long,missing-class-docstring,missing-function-docstring
from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

WIRE_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)

MAX_BUCKETS_PER_GROUP = 60

DeleteStatus = Literal["completed", "partial", "failed"]


def compression_ratio(uncompressed_bytes: int, compressed_bytes: int) -> float:
    """Return uncompressed/compressed, or 0.0 when nothing was compressed."""
    if compressed_bytes <= 0:
        return 0.0
    return uncompressed_bytes / compressed_bytes


def _ratio_matches(actual: float, expected: float) -> bool:
    return math.isclose(actual, expected, rel_tol=1e-9, abs_tol=1e-9)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


class ChunkDate(BaseModel):
    """Timestamp identity. Minute is present for buckets, absent for groups."""

    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)
    hour: int = Field(..., ge=0, le=23)
    minute: int | None = Field(default=None, ge=0, le=59)

    model_config = WIRE_CONFIG

    @property
    def key(self) -> str:
        """Canonical, order-stable membership key."""
        minute = "" if self.minute is None else str(self.minute)
        return f"{self.year}-{self.month}-{self.day}-{self.hour}-{minute}"

    @property
    def is_bucket_level(self) -> bool:
        return self.minute is not None

    def hour_identity(self) -> ChunkDate:
        """Return the group-level identity this timestamp belongs to."""
        return ChunkDate(year=self.year, month=self.month, day=self.day, hour=self.hour)

    def same_hour(self, other: ChunkDate) -> bool:
        return (
            self.year == other.year
            and self.month == other.month
            and self.day == other.day
            and self.hour == other.hour
        )


# ---------------------------------------------------------------------------
# Dataset hierarchy (Bucket -> ChunkGroup -> ChunkDataset)
# ---------------------------------------------------------------------------


class Bucket(BaseModel):
    """A single data chunk (one minute of backup data)."""

    date: ChunkDate
    data_chunk_count: Literal[1] = 1
    size_on_disk: int = Field(..., ge=0)
    compressed_bytes: int = Field(..., ge=0)
    uncompressed_bytes: int = Field(..., ge=0)
    compression_ratio: float = Field(..., ge=0)
    data_count: int = Field(..., ge=0)

    model_config = WIRE_CONFIG

    @model_validator(mode="after")
    def validate_bucket(self) -> Bucket:
        if self.date.minute is None:
            raise ValueError("bucket date requires a minute")
        expected = compression_ratio(self.uncompressed_bytes, self.compressed_bytes)
        if not _ratio_matches(self.compression_ratio, expected):
            raise ValueError(
                f"compressionRatio {self.compression_ratio} does not match "
                f"uncompressedBytes/compressedBytes ({expected})"
            )
        return self


class _Totals(BaseModel):
    """Aggregate fields shared by groups and the dataset root."""

    data_chunk_count: int = Field(..., ge=0)
    size_on_disk: int = Field(..., ge=0)
    compressed_bytes: int = Field(..., ge=0)
    uncompressed_bytes: int = Field(..., ge=0)
    compression_ratio: float = Field(..., ge=0)
    data_count: int = Field(..., ge=0)

    model_config = WIRE_CONFIG

    def _check_totals(self, children: tuple[Bucket, ...] | tuple[ChunkGroup, ...], label: str) -> None:
        """Totals are never authoritative: they must equal the sum of children."""
        for field in (
            "data_chunk_count",
            "size_on_disk",
            "compressed_bytes",
            "uncompressed_bytes",
            "data_count",
        ):
            expected = sum(getattr(child, field) for child in children)
            actual = getattr(self, field)
            if actual != expected:
                raise ValueError(
                    f"{label} {to_camel(field)}={actual} does not equal the sum of its children ({expected})"
                )

        expected_ratio = compression_ratio(self.uncompressed_bytes, self.compressed_bytes)
        if not _ratio_matches(self.compression_ratio, expected_ratio):
            raise ValueError(
                f"{label} compressionRatio {self.compression_ratio} must be recomputed "
                f"from summed bytes ({expected_ratio})"
            )


class ChunkGroup(_Totals):
    """An hourly group containing up to 60 minute buckets."""

    date: ChunkDate
    buckets: tuple[Bucket, ...] = Field(default=(), max_length=MAX_BUCKETS_PER_GROUP)

    @model_validator(mode="after")
    def validate_group(self) -> ChunkGroup:
        if self.date.minute is not None:
            raise ValueError("group date must not carry a minute")

        previous_minute = -1
        for bucket in self.buckets:
            if not bucket.date.same_hour(self.date):
                raise ValueError(
                    f"bucket {bucket.date.key} does not belong to group {self.date.key}"
                )
            minute = bucket.date.minute if bucket.date.minute is not None else -1
            if minute <= previous_minute:
                raise ValueError(
                    f"buckets of group {self.date.key} must be in strictly ascending minute order"
                )
            previous_minute = minute

        self._check_totals(self.buckets, f"group {self.date.key}")
        return self

    @property
    def hour(self) -> int:
        return self.date.hour


class ChunkDataset(_Totals):
    """Full chunk dataset: hour groups, totals, and per-bucket bounds."""

    groups: tuple[ChunkGroup, ...] = Field(default=())

    min_data_count: int = Field(..., ge=0)
    max_data_count: int = Field(..., ge=0)
    min_byte: int = Field(..., ge=0)
    max_byte: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_dataset(self) -> ChunkDataset:
        self._check_totals(self.groups, "dataset")

        # Groups are addressed by hour; bucket keys are selection identities.
        hours: set[int] = set()
        keys: set[str] = set()
        for group in self.groups:
            if group.date.hour in hours:
                raise ValueError(f"duplicate group for hour {group.date.hour}")
            hours.add(group.date.hour)
            for bucket in group.buckets:
                if bucket.date.key in keys:
                    raise ValueError(f"duplicate bucket {bucket.date.key}")
                keys.add(bucket.date.key)

        buckets = [bucket for group in self.groups for bucket in group.buckets]
        if buckets:
            counts = [bucket.data_count for bucket in buckets]
            sizes = [bucket.size_on_disk for bucket in buckets]
            bounds = (min(counts), max(counts), min(sizes), max(sizes))
        else:
            bounds = (0, 0, 0, 0)

        actual = (self.min_data_count, self.max_data_count, self.min_byte, self.max_byte)
        if actual != bounds:
            raise ValueError(
                "dataset bounds (minDataCount, maxDataCount, minByte, maxByte) "
                f"{actual} do not match bucket values {bounds}"
            )
        return self

    def iter_buckets(self):
        for group in self.groups:
            yield from group.buckets


# ---------------------------------------------------------------------------
# Service request / result payloads
# ---------------------------------------------------------------------------


class ChunkRequest(BaseModel):
    """Request body for download-url issuance and deletion."""

    dates: list[ChunkDate]

    model_config = WIRE_CONFIG


class DownloadFile(BaseModel):
    """Download URL for a single chunk file."""

    file_id: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    download_url: str = Field(..., min_length=1)
    expiration_date: str = Field(..., min_length=1)
    file_size: int = Field(..., ge=0)

    model_config = WIRE_CONFIG


class DeleteResult(BaseModel):
    """Result of a delete operation."""

    processed_file_ids: list[str] = Field(default_factory=list)
    failed_file_ids: list[str] = Field(default_factory=list)
    status: DeleteStatus
    additional_info: str = ""

    model_config = WIRE_CONFIG

    @model_validator(mode="after")
    def validate_status(self) -> DeleteResult:
        if self.status == "completed" and self.failed_file_ids:
            raise ValueError("completed delete must not report failed file ids")
        if self.status == "failed" and self.processed_file_ids:
            raise ValueError("failed delete must not report processed file ids")
        if self.status == "partial" and not (self.processed_file_ids and self.failed_file_ids):
            raise ValueError("partial delete requires both processed and failed file ids")
        return self


class SelectionSummary(BaseModel):
    count: int = Field(0, ge=0)
    total_size: int = Field(0, ge=0)
    total_records: int = Field(0, ge=0)

    model_config = WIRE_CONFIG
