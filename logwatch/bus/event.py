from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Topic names
FILE_WATCHER_TOPIC = "filewatcher"


@dataclass(frozen=True, slots=True)
class WatchFileInfo:
    file_name: str
    size: int
    offset: int
    last_modify_time: datetime
    is_ignore_older: bool = False


@dataclass(frozen=True, slots=True)
class WatchMetricData:
    """Payload published by file sources on the filewatcher topic."""

    pipeline_name: str
    source_name: str
    file_infos: tuple[WatchFileInfo, ...] = ()
    total_file_count: int = 0
    inactive_fd_count: int = 0


@dataclass(frozen=True, slots=True)
class Event:
    topic: str
    data: Any
    ts_unix_ms: int = 0
    meta: dict[str, Any] = field(default_factory=dict)

__all__ = ["Event", "WatchFileInfo", "WatchMetricData", "FILE_WATCHER_TOPIC"]
