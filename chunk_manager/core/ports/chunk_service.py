"""Chunk service protocol.

This module defines the service-facing boundary used by the action
orchestrator. Concrete implementations adapt a storage backend (or the
in-memory mock) to this protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chunk_manager.core.domain.types import (
        ChunkDataset,
        ChunkDate,
        DeleteResult,
        DownloadFile,
    )


class ChunkService(Protocol):
    """Data source and bulk-operation boundary.

    All calls are coroutines. Implementations raise on transport or service
    failure; the orchestrator turns those into error state.
    """

    async def fetch_chunks(self) -> ChunkDataset:
        """Return the full dataset for the current session."""

    async def issue_download_urls(self, dates: list[ChunkDate]) -> list[DownloadFile]:
        """Return one time-limited download descriptor per requested identity."""

    async def delete_chunks(self, dates: list[ChunkDate]) -> DeleteResult:
        """Delete the requested chunks and classify the outcome."""
