"""Application configuration model.

Configuration is a JSON document parsed into pydantic models. Every section
is optional; defaults reproduce one day of mock data and two-day URLs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

TWO_DAYS_SECONDS = 2 * 24 * 60 * 60


class MockDataConfig(BaseModel):
    """Shape of the generated mock dataset."""

    seed: int = 7
    year: int = Field(2024, ge=1)
    month: int = Field(1, ge=1, le=12)
    day: int = Field(1, ge=1, le=31)

    hours: int = Field(24, ge=0, le=24)
    minutes_per_hour: int = Field(60, ge=0, le=60)

    min_size: int = Field(89808, ge=0)
    max_size: int = Field(209888, ge=0)
    min_records: int = Field(0, ge=0)
    max_records: int = Field(5000, ge=0)
    min_compression_ratio: float = Field(1.5, gt=0)
    max_compression_ratio: float = Field(4.5, gt=0)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_ranges(self) -> MockDataConfig:
        if self.min_size > self.max_size:
            raise ValueError("min_size must not exceed max_size")
        if self.min_records > self.max_records:
            raise ValueError("min_records must not exceed max_records")
        if self.min_compression_ratio > self.max_compression_ratio:
            raise ValueError("min_compression_ratio must not exceed max_compression_ratio")
        return self


class DownloadConfig(BaseModel):
    download_base_url: str = Field("/api/download", min_length=1)
    url_ttl_seconds: int = Field(TWO_DAYS_SECONDS, gt=0)

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    """Top-level configuration."""

    log_level: LogLevel = "INFO"
    event_log_path: Path | None = None

    mock: MockDataConfig = Field(default_factory=MockDataConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, obj: dict[str, Any]) -> AppConfig:
        """Create an AppConfig instance from a JSON-compatible object."""
        return cls.model_validate(obj)

    @classmethod
    def from_file(cls, path: Path) -> AppConfig:
        if not path.exists():
            raise FileNotFoundError(path)
        return cls.from_json_obj(json.loads(path.read_text(encoding="utf-8")))
