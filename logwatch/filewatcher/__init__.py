"""Watch-snapshot aggregation and periodic dual export (metrics + log)."""
from .classifier import classify
from .listener import (
    LISTENER_NAME,
    CycleResult,
    FileWatcherListener,
    SchedulerState,
    snapshot_from_event_data,
)
from .log_export import render_log
from .metrics_export import DEFAULT_NAMESPACE, render_metrics
from .models import FileRecord, FileStatus, WatchSnapshot, render_key
from .store import SnapshotStore

__all__ = [
    "DEFAULT_NAMESPACE",
    "LISTENER_NAME",
    "CycleResult",
    "FileRecord",
    "FileStatus",
    "FileWatcherListener",
    "SchedulerState",
    "SnapshotStore",
    "WatchSnapshot",
    "classify",
    "render_key",
    "render_log",
    "render_metrics",
    "snapshot_from_event_data",
]
