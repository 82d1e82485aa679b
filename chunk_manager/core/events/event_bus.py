"""
Synchronous event bus for one chunk session.

Events are delivered to sinks in registration order, on the caller's
thread. Once closed, the bus rejects further events.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from chunk_manager.core.events.event_sink import EventSink
    from chunk_manager.core.events.events import ChunkEvent


class EventBusClosedError(RuntimeError):
    """Raised when an event is emitted after the bus was closed."""


class EventBus:
    """Dispatches chunk events to registered sinks."""

    def __init__(self, sinks: Iterable[EventSink] | None = None) -> None:
        self._sinks: list[EventSink] = list(sinks) if sinks is not None else []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def register(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def emit(self, event: ChunkEvent) -> None:
        if self._closed:
            raise EventBusClosedError(
                f"cannot emit {type(event).__name__}: event bus is closed"
            )
        for sink in self._sinks:
            sink.on_event(event)

    def close(self) -> None:
        """Finalize every sink that exposes close(). Safe to call twice."""
        if self._closed:
            return

        self._closed = True
        for sink in self._sinks:
            close_fn = getattr(sink, "close", None)
            if callable(close_fn):
                close_fn()
