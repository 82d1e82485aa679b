"""Selection-driven bulk actions.

The orchestrator sequences fetch, download-URL issuance and deletion against
a ChunkService. Failures never propagate past this layer: they are logged
and stored as ``error`` for the presentation layer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chunk_manager.core.domain.delete_status import is_complete
from chunk_manager.core.events.events import (
    ActionFailedEvent,
    DatasetLoadedEvent,
    DeleteCompletedEvent,
    DownloadIssuedEvent,
)

if TYPE_CHECKING:
    from chunk_manager.core.domain.selection import SelectionModel
    from chunk_manager.core.domain.types import ChunkDataset, DeleteResult, DownloadFile
    from chunk_manager.core.events.event_bus import EventBus
    from chunk_manager.core.ports.chunk_service import ChunkService

LOGGER = logging.getLogger(__name__)


def _error_message(exc: Exception, fallback: str) -> str:
    message = str(exc)
    return message if message else fallback


class ActionOrchestrator:
    """Runs bulk workflows for the current selection.

    Invariant:
    - ``loading`` is True exactly while a service call is awaited.
    - Download never touches the selection.
    - Delete clears the selection only on a completed status.

    There is no re-entrancy guard: callers disable their triggers while
    ``loading`` is set.
    """
    # pylint: disable=too-many-instance-attributes

    def __init__(
        self,
        *,
        selection: SelectionModel,
        service: ChunkService,
        event_bus: EventBus,
    ) -> None:
        self.selection = selection
        self._service = service
        self._event_bus = event_bus

        self.loading = False
        self.error: str | None = None

        self.download_result: list[DownloadFile] | None = None
        self.delete_result: DeleteResult | None = None
        self.download_modal_open = False
        self.delete_modal_open = False

    # ---- Dataset ----
    async def fetch_chunks(self) -> ChunkDataset | None:
        self.loading = True
        self.error = None

        try:
            dataset = await self._service.fetch_chunks()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._fail("fetch", _error_message(exc, "Failed to fetch chunks"))
            return None
        finally:
            self.loading = False

        self.selection.load_dataset(dataset)
        self._event_bus.emit(
            DatasetLoadedEvent(
                group_count=len(dataset.groups),
                bucket_count=self.selection.total_bucket_count,
                size_on_disk=dataset.size_on_disk,
                data_count=dataset.data_count,
            )
        )
        return dataset

    # ---- Download ----
    async def download_selected(self) -> list[DownloadFile] | None:
        if self.selection.selected_count == 0:
            return None

        dates = self.selection.selected_dates
        self.loading = True

        try:
            files = await self._service.issue_download_urls(dates)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._fail("download", _error_message(exc, "Failed to get download URLs"))
            return None
        finally:
            self.loading = False

        self.download_result = files
        self.download_modal_open = True

        self._event_bus.emit(
            DownloadIssuedEvent(
                requested=len(dates),
                issued=len(files),
                total_bytes=sum(f.file_size for f in files),
            )
        )
        return files

    # ---- Delete ----
    async def delete_selected(self) -> DeleteResult | None:
        if self.selection.selected_count == 0:
            return None

        dates = self.selection.selected_dates
        self.loading = True

        try:
            result = await self._service.delete_chunks(dates)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            self._fail("delete", _error_message(exc, "Failed to delete chunks"))
            return None
        finally:
            self.loading = False

        self.delete_result = result

        cleared = is_complete(result.status)
        if cleared:
            self.selection.clear_selection()
        else:
            LOGGER.warning(
                "Delete finished with status %s; selection kept",
                result.status,
                extra={"failed_file_ids": result.failed_file_ids},
            )

        self.delete_modal_open = True

        self._event_bus.emit(
            DeleteCompletedEvent(
                requested=len(dates),
                processed=len(result.processed_file_ids),
                failed=len(result.failed_file_ids),
                status=result.status,
                selection_cleared=cleared,
            )
        )
        return result

    # ---- Result presentation ----
    def open_download_modal(self) -> None:
        self.download_modal_open = True

    def close_download_modal(self) -> None:
        self.download_modal_open = False
        self.download_result = None

    def open_delete_modal(self) -> None:
        self.delete_modal_open = True

    def close_delete_modal(self) -> None:
        self.delete_modal_open = False
        self.delete_result = None

    def _fail(self, action: str, message: str) -> None:
        LOGGER.exception("Chunk %s failed", action)
        self.error = message
        self._event_bus.emit(ActionFailedEvent(action=action, error=message))
