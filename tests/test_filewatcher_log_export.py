from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from logwatch.filewatcher.log_export import render_log
from logwatch.filewatcher.models import FileRecord, WatchSnapshot, render_key
from logwatch.utils.exceptions import ExportError, LogSerializationError
from tests._helpers import NOW, make_record, make_snapshot


def test_record_layout_and_size_omitted():
    snap = make_snapshot(files=[make_record("a.log", size=120, offset=100)], total=1, inactive=2)
    doc = json.loads(render_log({snap.key: snap}))
    assert list(doc) == ["p1-s1"]
    rec = doc["p1-s1"]
    assert rec == {
        "pipeline": "p1",
        "source": "s1",
        "info": [{
            "name": "a.log",
            "ackOffset": 100,
            "modify": NOW.isoformat(),
            "ignoreOlder": False,
        }],
        "total": 1,
        "inactive": 2,
    }
    assert "size" not in rec["info"][0]


def test_info_omitted_when_no_files():
    snap = make_snapshot(total=0)
    doc = json.loads(render_log({snap.key: snap}))
    assert "info" not in doc["p1-s1"]


def test_empty_store_serializes_to_empty_object():
    assert render_log({}) == b"{}"


def test_naive_modify_time_rendered_as_utc():
    rec = FileRecord("x", 1, 1, datetime(2026, 1, 2, 3, 4, 5), False)
    snap = WatchSnapshot("p", "s", (rec,), 1, 0)
    doc = json.loads(render_log({snap.key: snap}))
    assert doc["p-s"]["info"][0]["modify"] == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc).isoformat()


def test_escaped_keys_for_names_with_separator():
    a = make_snapshot("a-b", "c")
    b = make_snapshot("a", "b-c")
    doc = json.loads(render_log({a.key: a, b.key: b}))
    assert len(doc) == 2
    assert render_key(a.key) == "a\\-b-c"
    assert render_key(b.key) == "a-b\\-c"


def test_unserializable_value_raises_typed_error():
    bad = WatchSnapshot("p", "s", (), total_file_count=object(), inactive_fd_count=0)  # type: ignore[arg-type]
    with pytest.raises(LogSerializationError) as exc:
        render_log({bad.key: bad})
    assert isinstance(exc.value, ExportError)
