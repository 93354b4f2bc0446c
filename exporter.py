#!/usr/bin/env python3
"""nginx stub_status exporter: Prometheus /metrics bridge.

Usage:
    NGINX_STATUS_ENDPOINT=http://nginx:80/stub_status python exporter.py

Configuration is read from the environment only:

    NGINX_STATUS_ENDPOINT      upstream stub_status URL
    NGINX_EXPORTER_NAMESPACE   metric name prefix (default: nginx)
    NGINX_EXPORTER_HOST        bind address (default: 0.0.0.0)
    NGINX_EXPORTER_PORT        port (default: 9113)
    NGINX_STATUS_TIMEOUT       upstream fetch timeout in seconds (default: 5.0)
    NGINX_EXPORTER_LOG_LEVEL   log level (default: info)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from collectors import NginxStubStatusCollector
from collectors.fetcher import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ExporterConfig:
    endpoint: str = ""
    namespace: str = "nginx"
    host: str = "0.0.0.0"
    port: int = 9113
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExporterConfig:
        """Build the config from environment variables.

        The endpoint is not validated here; a missing one shows up as a
        failed scrape on every pull.
        """
        env = os.environ if environ is None else environ
        return cls(
            endpoint=env.get("NGINX_STATUS_ENDPOINT", ""),
            namespace=env.get("NGINX_EXPORTER_NAMESPACE", "nginx"),
            host=env.get("NGINX_EXPORTER_HOST", "0.0.0.0"),
            port=int(env.get("NGINX_EXPORTER_PORT", "9113")),
            timeout=float(env.get("NGINX_STATUS_TIMEOUT", str(DEFAULT_TIMEOUT))),
            log_level=env.get("NGINX_EXPORTER_LOG_LEVEL", "info").lower(),
        )


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

_INDEX_HTML = """<html>
<head><title>NGINX Exporter</title></head>
<body>
<h1>NGINX Exporter</h1>
<p><a href="/metrics">Metrics</a></p>
</body>
</html>
"""


def create_app(
    config: ExporterConfig,
    registry: CollectorRegistry | None = None,
    collector: NginxStubStatusCollector | None = None,
) -> FastAPI:
    """Wire a collector into a dedicated registry and expose it over HTTP."""
    if registry is None:
        # Dedicated registry: no default process/platform metrics.
        registry = CollectorRegistry()
    if collector is None:
        collector = NginxStubStatusCollector(
            endpoint=config.endpoint,
            namespace=config.namespace,
            timeout=config.timeout,
        )
    registry.register(collector)

    app = FastAPI(title="NGINX Exporter")
    app.state.registry = registry
    app.state.collector = collector

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index() -> str:
        return _INDEX_HTML

    # Plain ``def``: FastAPI runs it in the threadpool, so the blocking
    # upstream fetch never stalls the event loop.
    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        """Scrape upstream and return all samples in text exposition format."""
        return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    return app


# ---------------------------------------------------------------------------
# CLI entrypoint
# ---------------------------------------------------------------------------

def main() -> None:
    config = ExporterConfig.from_env()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = create_app(config)
    logger.info(
        "Exporting %s on http://%s:%d/metrics", config.endpoint or "<unset endpoint>", config.host, config.port
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)


if __name__ == "__main__":
    main()
