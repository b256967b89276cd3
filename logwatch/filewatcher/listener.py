"""File-watcher export listener.

Subscribes to the `filewatcher` bus topic and keeps the latest watch snapshot
per (pipeline, source). A background thread wakes every `period`, drains the
accumulated snapshots and publishes them twice:

  1. as gauges, through a TopicMetricsExporter (Prometheus scrape);
  2. as one JSON record, through a LogSink.

The window then starts empty. Snapshots still pending when the listener is
stopped are dropped, never exported.

Public API:
  FileWatcherListener(config, metrics_exporter, log_sink, store=None)
  snapshot_from_event_data(data) -> WatchSnapshot
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from logwatch.bus.event import FILE_WATCHER_TOPIC, Event, WatchMetricData
from logwatch.config.settings import FileWatcherConfig
from logwatch.logstream.sink import LoggerSink, LogSink
from logwatch.metrics.exporter import GaugeSample, TopicMetricsExporter
from logwatch.utils.exceptions import EventPayloadError

from .log_export import render_log
from .metrics_export import DEFAULT_NAMESPACE, render_metrics
from .models import FileRecord, SnapshotKey, WatchSnapshot
from .store import SnapshotStore

logger = logging.getLogger(__name__)

LISTENER_NAME = "filewatcher"


class SchedulerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class CycleResult:
    snapshots: dict[SnapshotKey, WatchSnapshot] = field(default_factory=dict)
    samples: list[GaugeSample] = field(default_factory=list)
    metrics_exported: bool = False
    log_exported: bool = False


def snapshot_from_event_data(data: WatchMetricData) -> WatchSnapshot:
    files = tuple(
        FileRecord(
            file_name=fi.file_name,
            file_size=fi.size,
            ack_offset=fi.offset,
            last_modify_time=fi.last_modify_time,
            ignore_older=fi.is_ignore_older,
        )
        for fi in data.file_infos
    )
    return WatchSnapshot(
        pipeline_name=data.pipeline_name,
        source_name=data.source_name,
        files=files,
        total_file_count=data.total_file_count,
        inactive_fd_count=data.inactive_fd_count,
    )


class FileWatcherListener:
    topics: tuple[str, ...] = (FILE_WATCHER_TOPIC,)

    def __init__(self, config: FileWatcherConfig | None = None,
                 metrics_exporter: TopicMetricsExporter | None = None,
                 log_sink: LogSink | None = None,
                 store: SnapshotStore | None = None,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        self._config = config or FileWatcherConfig()
        self._metrics = metrics_exporter or TopicMetricsExporter()
        self._log_sink = log_sink or LoggerSink()
        self._store = store or SnapshotStore()
        self._namespace = namespace
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._state = SchedulerState.STOPPED
        self.cycles = 0

    @property
    def name(self) -> str:
        return LISTENER_NAME

    @property
    def config(self) -> FileWatcherConfig:
        return self._config

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def state(self) -> SchedulerState:
        return self._state

    def init(self, context: Any = None) -> None:
        pass

    # ------------------------------------------------------------------
    # Subscriber side (bus publisher threads)
    # ------------------------------------------------------------------
    def subscribe(self, event: Event) -> None:
        data = event.data
        if not isinstance(data, WatchMetricData):
            raise EventPayloadError(
                f"{self.name}: expected WatchMetricData on topic {event.topic!r}, got {type(data).__name__}"
            )
        self._store.upsert(snapshot_from_event_data(data))

    # ------------------------------------------------------------------
    # Export loop
    # ------------------------------------------------------------------
    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                logger.debug("%s: start ignored, export loop already running", self.name)
                return
            stop_event = threading.Event()
            self._stop_event = stop_event
            t = threading.Thread(target=self._loop, args=(stop_event,),
                                 name='logwatch-filewatcher-export', daemon=True)
            self._thread = t
            self._state = SchedulerState.RUNNING
            t.start()
        logger.info("%s: export loop started period=%ss unfinished_timeout=%ss", self.name,
                    self._config.period.total_seconds(), self._config.unfinished_timeout.total_seconds())

    def stop(self, timeout: float | None = None) -> None:
        with self._lock:
            t = self._thread
            self._stop_event.set()
            self._thread = None
            self._state = SchedulerState.STOPPED
        if t is None:
            return
        if t is not threading.current_thread():
            t.join(timeout)
        logger.info("%s: export loop stopped after %d cycles", self.name, self.cycles)

    def _loop(self, stop_event: threading.Event) -> None:
        period = self._config.period_seconds
        while not stop_event.wait(period):
            try:
                self.run_cycle()
            except Exception:
                logger.exception("%s: export cycle failed", self.name)

    def run_cycle(self) -> CycleResult:
        """Run one export cycle: drain, publish metrics, publish log."""
        result = CycleResult(snapshots=self._store.drain())
        try:
            result.samples = render_metrics(result.snapshots, self._config.unfinished_timeout,
                                            namespace=self._namespace)
            self._metrics.export(FILE_WATCHER_TOPIC, result.samples)
            result.metrics_exported = True
        except Exception:
            logger.exception("%s: metrics export failed", self.name)
        try:
            self._log_sink.export(FILE_WATCHER_TOPIC, render_log(result.snapshots))
            result.log_exported = True
        except Exception:
            logger.exception("%s: log export failed", self.name)
        self.cycles += 1
        logger.debug("filewatcher.cycle snapshots=%d samples=%d log=%s",
                     len(result.snapshots), len(result.samples), result.log_exported)
        return result


__all__ = [
    "FileWatcherListener",
    "CycleResult",
    "SchedulerState",
    "LISTENER_NAME",
    "snapshot_from_event_data",
]
