"""
Domain event models.

These events represent immutable facts observed during a session.
They are consumed by loggers, recorders, and monitoring pipelines.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class DatasetLoadedEvent:
    group_count: int
    bucket_count: int

    size_on_disk: int
    data_count: int


@dataclass(slots=True)
class SelectionChangedEvent:
    action: str  # toggle_bucket | toggle_group | toggle_all | clear | reset
    target: str | None

    selected_count: int


@dataclass(slots=True)
class DownloadIssuedEvent:
    requested: int
    issued: int

    total_bytes: int


@dataclass(slots=True)
class DeleteCompletedEvent:
    requested: int
    processed: int
    failed: int

    status: str
    selection_cleared: bool


@dataclass(slots=True)
class ActionFailedEvent:
    action: str  # fetch | download | delete
    error: str


ChunkEvent = (
    DatasetLoadedEvent
    | SelectionChangedEvent
    | DownloadIssuedEvent
    | DeleteCompletedEvent
    | ActionFailedEvent
)
