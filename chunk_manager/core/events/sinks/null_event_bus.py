from __future__ import annotations

from typing import TYPE_CHECKING

from chunk_manager.core.events.event_bus import EventBus

if TYPE_CHECKING:
    from chunk_manager.core.events.events import ChunkEvent


class _NullSink:
    """Event sink that discards all events."""

    def on_event(self, event: ChunkEvent) -> None:
        return


class NullEventBus(EventBus):
    """EventBus that discards all events (used for tests and library callers)."""

    def __init__(self) -> None:
        super().__init__(sinks=[_NullSink()])


class RecordingSink:
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self.events: list[ChunkEvent] = []

    def on_event(self, event: ChunkEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[ChunkEvent]:
        return [event for event in self.events if isinstance(event, event_type)]
