"""
Event sink interface.

Sinks consume the chunk events emitted by the selection model and the
action orchestrator. A sink may also expose close(); the bus calls it once
when the session ends.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chunk_manager.core.events.events import ChunkEvent


class EventSink(Protocol):
    def on_event(self, event: ChunkEvent) -> None:
        """Consume a chunk event."""
