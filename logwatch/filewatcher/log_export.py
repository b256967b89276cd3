from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from logwatch.utils.exceptions import LogSerializationError

from .models import SnapshotKey, WatchSnapshot, as_utc, render_key


def snapshot_to_record(snap: WatchSnapshot) -> dict[str, Any]:
    """JSON-ready form of one snapshot.

    File size is deliberately left out; consumers stat the file themselves.
    """
    record: dict[str, Any] = {
        "pipeline": snap.pipeline_name,
        "source": snap.source_name,
    }
    if snap.files:
        record["info"] = [
            {
                "name": f.file_name,
                "ackOffset": f.ack_offset,
                "modify": as_utc(f.last_modify_time).isoformat(),
                "ignoreOlder": f.ignore_older,
            }
            for f in snap.files
        ]
    record["total"] = snap.total_file_count
    record["inactive"] = snap.inactive_fd_count
    return record


def render_log(snapshots: Mapping[SnapshotKey, WatchSnapshot]) -> bytes:
    """Serialize the whole accumulation window into one JSON blob."""
    try:
        doc = {render_key(key): snapshot_to_record(snap) for key, snap in snapshots.items()}
        return json.dumps(doc, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as e:
        raise LogSerializationError(f"failed to serialize {len(snapshots)} watch snapshots: {e}") from e


__all__ = ["render_log", "snapshot_to_record"]
