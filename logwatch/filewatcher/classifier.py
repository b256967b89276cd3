from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .models import FileRecord, FileStatus, as_utc


def classify(record: FileRecord, unfinished_timeout: timedelta | float,
             now: datetime | None = None) -> FileStatus:
    """Derive the health status of one tracked file.

    ignored beats unfinished: files skipped by the age policy are never
    reported as stuck. A file is unfinished when it has not been modified for
    longer than `unfinished_timeout` and still has at least one unacked byte.
    """
    if record.ignore_older:
        return FileStatus.IGNORED
    if not isinstance(unfinished_timeout, timedelta):
        unfinished_timeout = timedelta(seconds=float(unfinished_timeout))
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    idle = now - as_utc(record.last_modify_time)
    if idle > unfinished_timeout and record.unacked_bytes >= 1:
        return FileStatus.UNFINISHED
    return FileStatus.PENDING


__all__ = ["classify"]
