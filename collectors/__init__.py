from .base import BaseCollector, MetricSpec
from .errors import (
    BodyReadError,
    FormatMismatchError,
    RequestConstructionError,
    StubStatusError,
    TransportError,
    UnexpectedStatusError,
)
from .fetcher import fetch_status
from .nginx_collector import STUB_STATUS_METRICS, NginxStubStatusCollector
from .stub_status import StubConnections, StubStatus, parse_stub_status

__all__ = [
    "BaseCollector",
    "MetricSpec",
    "StubStatusError",
    "RequestConstructionError",
    "TransportError",
    "UnexpectedStatusError",
    "BodyReadError",
    "FormatMismatchError",
    "fetch_status",
    "StubConnections",
    "StubStatus",
    "parse_stub_status",
    "STUB_STATUS_METRICS",
    "NginxStubStatusCollector",
]
