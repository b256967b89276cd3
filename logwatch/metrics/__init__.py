"""Prometheus publication: per-topic gauge collector and scrape endpoint."""
from .exporter import (
    NAMESPACE,
    PIPELINE_NAME_KEY,
    SOURCE_NAME_KEY,
    GaugeSample,
    TopicMetricsExporter,
    build_fq_name,
)
from .server import start_metrics_server

__all__ = [
    "NAMESPACE",
    "PIPELINE_NAME_KEY",
    "SOURCE_NAME_KEY",
    "GaugeSample",
    "TopicMetricsExporter",
    "build_fq_name",
    "start_metrics_server",
]
