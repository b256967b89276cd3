from __future__ import annotations

from datetime import timedelta, timezone

from logwatch.filewatcher.classifier import classify
from logwatch.filewatcher.models import FileStatus
from tests._helpers import NOW, make_record

HOUR = timedelta(hours=1)
EPS = timedelta(seconds=1)


def test_fresh_file_is_pending():
    rec = make_record(size=500, offset=100, age=timedelta(minutes=5))
    assert classify(rec, HOUR, now=NOW) is FileStatus.PENDING


def test_stale_file_with_one_unacked_byte_is_unfinished():
    rec = make_record(size=101, offset=100, age=HOUR + EPS)
    assert classify(rec, HOUR, now=NOW) is FileStatus.UNFINISHED


def test_stale_file_fully_acked_is_pending():
    rec = make_record(size=100, offset=100, age=HOUR + EPS)
    assert classify(rec, HOUR, now=NOW) is FileStatus.PENDING


def test_offset_ahead_of_size_counts_as_unacked():
    # truncated file: offset beyond current size
    rec = make_record(size=10, offset=50, age=HOUR + EPS)
    assert classify(rec, HOUR, now=NOW) is FileStatus.UNFINISHED


def test_exactly_at_timeout_is_not_unfinished():
    rec = make_record(size=200, offset=100, age=HOUR)
    assert classify(rec, HOUR, now=NOW) is FileStatus.PENDING


def test_ignore_older_wins_over_staleness():
    rec = make_record(size=999, offset=0, age=timedelta(days=30), ignore_older=True)
    assert classify(rec, HOUR, now=NOW) is FileStatus.IGNORED
    fresh = make_record(size=1, offset=1, ignore_older=True)
    assert classify(fresh, HOUR, now=NOW) is FileStatus.IGNORED


def test_timeout_as_seconds_and_naive_timestamps():
    rec = make_record(size=2, offset=1, age=timedelta(seconds=61))
    naive = rec.__class__(rec.file_name, rec.file_size, rec.ack_offset,
                          rec.last_modify_time.astimezone(timezone.utc).replace(tzinfo=None), False)
    assert classify(naive, 60, now=NOW) is FileStatus.UNFINISHED
    assert classify(naive, 60.0, now=NOW.replace(tzinfo=None)) is FileStatus.UNFINISHED


def test_status_values_match_label_names():
    assert [s.value for s in FileStatus] == ["pending", "unfinished", "ignored"]
