#!/usr/bin/env python3
"""
Per-topic gauge publication for Prometheus scrapes.

Listeners render their state into flat lists of `GaugeSample` and hand them
to `TopicMetricsExporter.export(topic, samples)`. Each export replaces the
topic's previous set wholesale, so series that vanish from an export vanish
from the next scrape.

The exporter is a custom collector; it doesn't start any HTTP server on its
own. Register it on a registry (see `register`) and serve that registry with
`logwatch.metrics.server.start_metrics_server`.
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from prometheus_client import REGISTRY, CollectorRegistry
from prometheus_client.core import GaugeMetricFamily

logger = logging.getLogger(__name__)

# Base namespace for every series this package publishes.
NAMESPACE = "logwatch"

PIPELINE_NAME_KEY = "pipeline"
SOURCE_NAME_KEY = "source"


def build_fq_name(*parts: str) -> str:
    """Join non-empty name parts with underscores (prometheus BuildFQName)."""
    return "_".join(p for p in parts if p)


@dataclass(frozen=True, slots=True)
class GaugeSample:
    name: str
    documentation: str
    labels: Mapping[str, str] = field(default_factory=dict)
    value: float = 0.0


class TopicMetricsExporter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._topics: dict[str, list[GaugeSample]] = {}

    def export(self, topic: str, samples: Iterable[GaugeSample]) -> None:
        batch = list(samples)
        with self._lock:
            self._topics[topic] = batch
        logger.debug("metrics.export topic=%s samples=%d", topic, len(batch))

    def samples(self, topic: str | None = None) -> list[GaugeSample]:
        with self._lock:
            if topic is not None:
                return list(self._topics.get(topic, ()))
            return [s for batch in self._topics.values() for s in batch]

    def topics(self) -> list[str]:
        with self._lock:
            return sorted(self._topics)

    def describe(self) -> list[GaugeMetricFamily]:
        # Series are dynamic; skip registry-time name collision checks.
        return []

    def collect(self) -> Iterator[GaugeMetricFamily]:
        families: dict[str, tuple[GaugeMetricFamily, list[str]]] = {}
        for sample in self.samples():
            entry = families.get(sample.name)
            if entry is None:
                label_names = list(sample.labels)
                entry = (GaugeMetricFamily(sample.name, sample.documentation, labels=label_names), label_names)
                families[sample.name] = entry
            fam, label_names = entry
            fam.add_metric([str(sample.labels.get(k, "")) for k in label_names], sample.value)
        for fam, _ in families.values():
            yield fam

    def register(self, registry: CollectorRegistry | None = None) -> TopicMetricsExporter:
        (registry or REGISTRY).register(self)
        return self


__all__ = [
    "GaugeSample",
    "TopicMetricsExporter",
    "build_fq_name",
    "NAMESPACE",
    "PIPELINE_NAME_KEY",
    "SOURCE_NAME_KEY",
]
