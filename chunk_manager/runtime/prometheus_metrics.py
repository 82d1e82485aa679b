from __future__ import annotations

import json
import logging
import os
from typing import Any

from prometheus_client import CollectorRegistry, Counter, Gauge, push_to_gateway

from chunk_manager.core.events.events import (
    ActionFailedEvent,
    DeleteCompletedEvent,
    DownloadIssuedEvent,
    SelectionChangedEvent,
)

LOGGER = logging.getLogger(__name__)


class PrometheusMetricsClient:
    """Minimal Prometheus Pushgateway client for CLI sessions.

    Expected environment:
    - PROMETHEUS_PUSHGATEWAY_URL: URL to the Pushgateway.
      Example: http://pushgateway.monitoring.svc.cluster.local:9091

    Optional:
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object used as grouping key.

    Metrics are always collected into the registry; pushing is a no-op
    without a gateway URL. Callers treat pushing as a side-effect and never
    fail a workflow because of metrics delivery.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._pushgateway_url = os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self.registry = registry if registry is not None else CollectorRegistry()

    def is_enabled(self) -> bool:
        return self._pushgateway_url is not None

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        grouping: dict[str, str] = {}
        for key, value in data.items():
            if isinstance(key, str) and isinstance(value, str):
                grouping[key] = value
        return grouping

    def push_all(self, *, job: str) -> None:
        if not self._pushgateway_url:
            return

        push_to_gateway(
            gateway=self._pushgateway_url,
            job=job,
            registry=self.registry,
            grouping_key=self._grouping_key,
        )

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": job, "grouping_key": self._grouping_key},
        )


class MetricsEventSink:
    """Event sink that counts chunk actions into a Prometheus registry."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self.selected_buckets = Gauge(
            "chunk_manager_selected_buckets",
            "Buckets currently selected",
            registry=registry,
        )
        self.downloads_issued = Counter(
            "chunk_manager_download_urls_issued",
            "Download URLs issued",
            registry=registry,
        )
        self.downloaded_bytes = Counter(
            "chunk_manager_download_bytes",
            "Bytes covered by issued download URLs",
            registry=registry,
        )
        self.deletes = Counter(
            "chunk_manager_delete_requests",
            "Delete requests by result status",
            labelnames=["status"],
            registry=registry,
        )
        self.deleted_files = Counter(
            "chunk_manager_deleted_files",
            "Files reported as deleted",
            registry=registry,
        )
        self.failures = Counter(
            "chunk_manager_action_failures",
            "Failed service calls by action",
            labelnames=["action"],
            registry=registry,
        )

    def on_event(self, event: Any) -> None:
        if isinstance(event, SelectionChangedEvent):
            self.selected_buckets.set(event.selected_count)
        elif isinstance(event, DownloadIssuedEvent):
            self.downloads_issued.inc(event.issued)
            self.downloaded_bytes.inc(event.total_bytes)
        elif isinstance(event, DeleteCompletedEvent):
            self.deletes.labels(status=event.status).inc()
            self.deleted_files.inc(event.processed)
        elif isinstance(event, ActionFailedEvent):
            self.failures.labels(action=event.action).inc()
