"""In-memory chunk service.

Stands in for the storage backend: serves a generated dataset, issues
download descriptors pointing at a mock download endpoint, and reports
deletions without removing anything.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from chunk_manager.core.domain.delete_status import DELETE_COMPLETED, classify_delete
from chunk_manager.core.domain.identity import chunk_file_name
from chunk_manager.core.domain.types import (
    ChunkRequest,
    DeleteResult,
    DownloadFile,
)
from chunk_manager.services.mock_data import generate_dataset

if TYPE_CHECKING:
    from chunk_manager.core.domain.types import Bucket, ChunkDataset, ChunkDate
    from chunk_manager.runtime.config import AppConfig

LOGGER = logging.getLogger(__name__)


def _request_dates(dates: Any) -> list[ChunkDate]:
    """Validate a request body; missing or malformed dates raise ValidationError."""
    return ChunkRequest.model_validate({"dates": dates}).dates


class MockChunkService:
    """ChunkService implementation backed by a generated dataset."""

    def __init__(
        self,
        cfg: AppConfig,
        *,
        dataset: ChunkDataset | None = None,
        now: datetime | None = None,
    ) -> None:
        self._cfg = cfg
        self._dataset = dataset if dataset is not None else generate_dataset(cfg.mock)
        self._now = now
        self._rng = random.Random(cfg.mock.seed)

        self._buckets: dict[str, Bucket] = {
            bucket.date.key: bucket for bucket in self._dataset.iter_buckets()
        }

    @classmethod
    def from_config(cls, cfg: AppConfig) -> MockChunkService:
        return cls(cfg)

    def _current_time(self) -> datetime:
        return self._now if self._now is not None else datetime.now(timezone.utc)

    def _fallback_size(self) -> int:
        return self._rng.randint(self._cfg.mock.min_size, self._cfg.mock.max_size)

    async def fetch_chunks(self) -> ChunkDataset:
        return self._dataset

    async def issue_download_urls(self, dates: Any) -> list[DownloadFile]:
        request_dates = _request_dates(dates)
        download = self._cfg.download
        expiration = self._current_time() + timedelta(seconds=download.url_ttl_seconds)

        files: list[DownloadFile] = []
        for date in request_dates:
            bucket = self._buckets.get(date.key)
            size = bucket.size_on_disk if bucket is not None else self._fallback_size()
            file_name = chunk_file_name(date)

            files.append(
                DownloadFile(
                    file_id=f"f{len(files) + 1}",
                    file_name=file_name,
                    download_url=(
                        f"{download.download_base_url}?file={quote(file_name, safe='')}&size={size}"
                    ),
                    expiration_date=expiration.isoformat(),
                    file_size=size,
                )
            )

        LOGGER.info("Issued %d download URLs", len(files))
        return files

    async def delete_chunks(self, dates: Any) -> DeleteResult:
        request_dates = _request_dates(dates)

        processed: list[str] = []
        failed: list[str] = []
        for index, date in enumerate(request_dates):
            file_id = f"f{index + 1}"
            if date.key in self._buckets:
                processed.append(file_id)
            else:
                failed.append(file_id)

        status = classify_delete(len(processed), len(failed))
        if status == DELETE_COMPLETED:
            info = f"{len(processed)} files deleted successfully"
        else:
            info = f"{len(processed)} files deleted, {len(failed)} failed"

        LOGGER.info("Delete request finished: %s", info)
        return DeleteResult(
            processed_file_ids=processed,
            failed_file_ids=failed,
            status=status,
            additional_info=info,
        )
