"""Metrics server bootstrap.

Starts the Prometheus HTTP endpoint serving a registry (default: the process
registry). Kept separate so the export listener never owns a socket.
"""
from __future__ import annotations

import logging

from prometheus_client import REGISTRY, CollectorRegistry, start_http_server

logger = logging.getLogger(__name__)


def start_metrics_server(port: int = 9108, host: str = "0.0.0.0",
                         registry: CollectorRegistry | None = None) -> None:
    """Serve `registry` on http://host:port/metrics from a daemon thread."""
    start_http_server(port, addr=host, registry=registry or REGISTRY)
    logger.info("Metrics server listening on %s:%s", host, port)


__all__ = ["start_metrics_server"]
