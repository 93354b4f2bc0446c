"""Collector republishing nginx stub_status counters in Prometheus format."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx
from prometheus_client.core import Metric

from .base import BaseCollector, MetricSpec
from .errors import StubStatusError
from .fetcher import DEFAULT_TIMEOUT, fetch_status
from .stub_status import parse_stub_status

logger = logging.getLogger(__name__)

STUB_STATUS_METRICS: tuple[MetricSpec, ...] = (
    MetricSpec("connections_active", "Active client connections", "gauge", "connections.active"),
    MetricSpec(
        "connections_reading",
        "Connections currently reading client request headers",
        "gauge",
        "connections.reading",
    ),
    MetricSpec(
        "connections_accepted_total",
        "Total accepted client connections",
        "counter",
        "connections.accepted",
    ),
    MetricSpec(
        "connections_handled_total",
        "Total handled client connections",
        "counter",
        "connections.handled",
    ),
    MetricSpec("connections_waiting", "Idle client connections", "gauge", "connections.waiting"),
    MetricSpec(
        "connections_writing",
        "Connections where NGINX is currently writing responses to clients",
        "gauge",
        "connections.writing",
    ),
    MetricSpec(
        "http_requests_total",
        "Total number of HTTP requests handled",
        "counter",
        "requests",
    ),
)


class NginxStubStatusCollector(BaseCollector):
    def __init__(
        self,
        endpoint: str,
        namespace: str = "nginx",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(namespace)
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport
        self.metrics = STUB_STATUS_METRICS

    def describe(self) -> list[Metric]:
        return [spec.family(self.namespace) for spec in self.metrics]

    def collect(self) -> Iterator[Metric]:
        try:
            body = fetch_status(self.endpoint, timeout=self.timeout, transport=self._transport)
            snapshot = parse_stub_status(body)
        except StubStatusError as exc:
            logger.warning("Scrape of %s failed (%s): %s", self.endpoint, type(exc).__name__, exc)
            return

        logger.debug("Scraped %s: %s", self.endpoint, snapshot)
        for spec in self.metrics:
            yield spec.family(self.namespace, float(spec.value_from(snapshot)))
