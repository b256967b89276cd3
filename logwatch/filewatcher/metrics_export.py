"""Render accumulated watch snapshots into labeled gauge samples.

Series (default namespace `logwatch_filewatcher`):
  <ns>_total_file_count{pipeline,source}
  <ns>_inactive_file_count{pipeline,source}
  <ns>_file_size{pipeline,source,filename,status}
  <ns>_file_ack_offset{pipeline,source,filename,status}
  <ns>_file_last_modify{pipeline,source,filename,status}   (ms since epoch)

One export yields 2 samples per snapshot plus 3 per tracked file.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone

from logwatch.bus.event import FILE_WATCHER_TOPIC
from logwatch.metrics.exporter import (
    NAMESPACE,
    PIPELINE_NAME_KEY,
    SOURCE_NAME_KEY,
    GaugeSample,
    build_fq_name,
)

from .classifier import classify
from .models import WatchSnapshot

FILE_NAME_KEY = "filename"
FILE_STATUS_KEY = "status"

DEFAULT_NAMESPACE = build_fq_name(NAMESPACE, FILE_WATCHER_TOPIC)


def _iter_snapshots(snapshots: Mapping[object, WatchSnapshot] | Iterable[WatchSnapshot]) -> Iterable[WatchSnapshot]:
    if isinstance(snapshots, Mapping):
        return snapshots.values()
    return snapshots


def render_metrics(snapshots: Mapping[object, WatchSnapshot] | Iterable[WatchSnapshot],
                   unfinished_timeout: timedelta | float, *,
                   namespace: str = DEFAULT_NAMESPACE,
                   now: datetime | None = None) -> list[GaugeSample]:
    # One clock reading per render so every file is judged at the same instant.
    now = now or datetime.now(timezone.utc)
    out: list[GaugeSample] = []
    for snap in _iter_snapshots(snapshots):
        base = {PIPELINE_NAME_KEY: snap.pipeline_name, SOURCE_NAME_KEY: snap.source_name}
        out.append(GaugeSample(
            build_fq_name(namespace, "total_file_count"), "file count total",
            base, float(snap.total_file_count),
        ))
        out.append(GaugeSample(
            build_fq_name(namespace, "inactive_file_count"), "inactive file count",
            base, float(snap.inactive_fd_count),
        ))
        for rec in snap.files:
            status = classify(rec, unfinished_timeout, now=now)
            labels = {**base, FILE_NAME_KEY: rec.file_name, FILE_STATUS_KEY: status.value}
            out.append(GaugeSample(build_fq_name(namespace, "file_size"), "file size",
                                   labels, float(rec.file_size)))
            out.append(GaugeSample(build_fq_name(namespace, "file_ack_offset"), "file ack offset",
                                   labels, float(rec.ack_offset)))
            out.append(GaugeSample(build_fq_name(namespace, "file_last_modify"), "file last modify timestamp",
                                   labels, float(rec.last_modify_ms)))
    return out


__all__ = ["render_metrics", "DEFAULT_NAMESPACE", "FILE_NAME_KEY", "FILE_STATUS_KEY"]
