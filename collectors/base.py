"""Base collector ABC and shared metric descriptor type."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Literal

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric


@dataclass(frozen=True)
class MetricSpec:
    suffix: str
    help: str
    kind: Literal["gauge", "counter"]
    source: str

    def name(self, namespace: str) -> str:
        return f"{namespace}_{self.suffix}"

    def value_from(self, snapshot: Any) -> int:
        """Read this metric's value out of a parsed snapshot."""
        return attrgetter(self.source)(snapshot)

    def family(self, namespace: str, value: float | None = None) -> Metric:
        """Build a metric family; without a value it carries no samples."""
        if self.kind == "counter":
            return CounterMetricFamily(self.name(namespace), self.help, value=value)
        return GaugeMetricFamily(self.name(namespace), self.help, value=value)


class BaseCollector(ABC):
    """Abstract base for prometheus_client custom collectors.

    Subclasses are registered explicitly with a ``CollectorRegistry``;
    constructing one has no side effects.
    """

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    @abstractmethod
    def describe(self) -> Iterable[Metric]:
        """Return sample-less families naming every metric this collector emits."""
        ...

    @abstractmethod
    def collect(self) -> Iterable[Metric]:
        """Fetch current metrics. Must not raise on upstream failure: emit nothing."""
        ...
