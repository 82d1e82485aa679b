"""Per-session wiring of selection state, orchestrator and event sinks.

One ChunkSession owns the state for one operator session. Nothing is shared
through module globals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chunk_manager.actions.orchestrator import ActionOrchestrator
from chunk_manager.core.domain.selection import SelectionModel
from chunk_manager.core.events.event_bus import EventBus
from chunk_manager.core.events.sinks.file_recorder import FileRecorderSink
from chunk_manager.core.events.sinks.sink_logging import LoggingEventSink
from chunk_manager.runtime.prometheus_metrics import MetricsEventSink, PrometheusMetricsClient

if TYPE_CHECKING:
    from chunk_manager.core.ports.chunk_service import ChunkService
    from chunk_manager.runtime.config import AppConfig

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ChunkSession:
    event_bus: EventBus
    selection: SelectionModel
    orchestrator: ActionOrchestrator
    metrics: PrometheusMetricsClient

    def close(self) -> None:
        """Push metrics (best-effort) and finalize sinks."""
        if self.metrics.is_enabled():
            try:
                self.metrics.push_all(job="chunk_manager")
            except Exception:  # pylint: disable=broad-exception-caught
                LOGGER.exception("Prometheus push failed")
        self.event_bus.close()


def build_event_bus(cfg: AppConfig, metrics: PrometheusMetricsClient) -> EventBus:
    logger = logging.getLogger("bus")

    sinks = [
        LoggingEventSink(logger, level=logging.DEBUG),
        MetricsEventSink(metrics.registry),
    ]
    if cfg.event_log_path is not None:
        sinks.append(FileRecorderSink(cfg.event_log_path))

    return EventBus(sinks=sinks)


def build_session(cfg: AppConfig, service: ChunkService) -> ChunkSession:
    metrics = PrometheusMetricsClient()
    event_bus = build_event_bus(cfg, metrics)

    selection = SelectionModel(event_bus=event_bus)
    orchestrator = ActionOrchestrator(
        selection=selection,
        service=service,
        event_bus=event_bus,
    )
    return ChunkSession(
        event_bus=event_bus,
        selection=selection,
        orchestrator=orchestrator,
        metrics=metrics,
    )
