"""
Logging event sink.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chunk_manager.core.events.events import ChunkEvent


class LoggingEventSink:
    """Logs domain events using the standard logging module."""

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        self._logger = logger
        self._level = level

    def on_event(self, event: ChunkEvent) -> None:
        payload = asdict(event) if is_dataclass(event) else {"event": str(event)}
        self._logger.log(
            self._level,
            "%s %s",
            type(event).__name__,
            payload,
            extra={"event": event},
        )
