"""Snapshot data model for the file-watcher export listener."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

KEY_SEPARATOR = "-"

SnapshotKey = tuple[str, str]


class FileStatus(str, Enum):
    PENDING = "pending"
    UNFINISHED = "unfinished"
    IGNORED = "ignored"


def as_utc(ts: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


@dataclass(frozen=True, slots=True)
class FileRecord:
    file_name: str
    file_size: int
    ack_offset: int
    last_modify_time: datetime
    ignore_older: bool = False

    @property
    def unacked_bytes(self) -> int:
        return abs(self.file_size - self.ack_offset)

    @property
    def last_modify_ms(self) -> int:
        return int(as_utc(self.last_modify_time).timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class WatchSnapshot:
    """Latest report of one source within one pipeline."""

    pipeline_name: str
    source_name: str
    files: tuple[FileRecord, ...] = ()
    total_file_count: int = 0
    inactive_fd_count: int = 0

    @property
    def key(self) -> SnapshotKey:
        return (self.pipeline_name, self.source_name)


def _escape(part: str) -> str:
    return part.replace("\\", "\\\\").replace(KEY_SEPARATOR, "\\" + KEY_SEPARATOR)


def render_key(key: SnapshotKey) -> str:
    """String form of a store key for serialized output.

    `("p1", "s1")` renders as `p1-s1`; backslashes and separators inside a
    name are backslash-escaped so distinct keys never render the same.
    """
    pipeline, source = key
    return f"{_escape(pipeline)}{KEY_SEPARATOR}{_escape(source)}"


__all__ = [
    "FileRecord",
    "FileStatus",
    "KEY_SEPARATOR",
    "SnapshotKey",
    "WatchSnapshot",
    "as_utc",
    "render_key",
]
