from __future__ import annotations

import threading

from logwatch.filewatcher.models import render_key
from logwatch.filewatcher.store import SnapshotStore
from tests._helpers import make_record, make_snapshot


def test_upsert_overwrites_instead_of_merging():
    store = SnapshotStore()
    store.upsert(make_snapshot(files=[make_record("a.log"), make_record("b.log")]))
    store.upsert(make_snapshot(files=[make_record("c.log")], inactive=3))
    assert len(store) == 1
    snap = store.get(("p1", "s1"))
    assert snap is not None
    assert [f.file_name for f in snap.files] == ["c.log"]
    assert snap.inactive_fd_count == 3


def test_distinct_keys_kept_separately():
    store = SnapshotStore()
    store.upsert(make_snapshot("p1", "s1"))
    store.upsert(make_snapshot("p1", "s2"))
    store.upsert(make_snapshot("p2", "s1"))
    assert set(store.snapshot()) == {("p1", "s1"), ("p1", "s2"), ("p2", "s1")}


def test_separator_in_names_does_not_collide():
    store = SnapshotStore()
    store.upsert(make_snapshot("a-b", "c"))
    store.upsert(make_snapshot("a", "b-c"))
    assert len(store) == 2
    keys = {render_key(k) for k in store.snapshot()}
    assert len(keys) == 2


def test_drain_returns_contents_and_empties():
    store = SnapshotStore()
    store.upsert(make_snapshot("p1", "s1"))
    taken = store.drain()
    assert list(taken) == [("p1", "s1")]
    assert len(store) == 0
    # writes after the drain belong to the next window
    store.upsert(make_snapshot("p1", "s2"))
    assert list(taken) == [("p1", "s1")]
    assert list(store.drain()) == [("p1", "s2")]


def test_clear_is_idempotent():
    store = SnapshotStore()
    store.clear()
    store.upsert(make_snapshot())
    store.clear()
    store.clear()
    assert len(store) == 0
    assert store.drain() == {}


def test_snapshot_is_a_copy():
    store = SnapshotStore()
    store.upsert(make_snapshot())
    view = store.snapshot()
    store.clear()
    assert len(view) == 1


def test_concurrent_upserts_are_not_lost():
    store = SnapshotStore()
    drained: list[dict] = []
    barrier = threading.Barrier(9)

    def writer(idx: int) -> None:
        barrier.wait()
        for j in range(200):
            store.upsert(make_snapshot(f"p{idx}", f"s{j}"))

    def drainer() -> None:
        barrier.wait()
        for _ in range(50):
            drained.append(store.drain())

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(8)]
    threads.append(threading.Thread(target=drainer))
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    drained.append(store.drain())
    seen = [k for batch in drained for k in batch]
    # every distinct key written exactly once shows up exactly once
    assert len(seen) == len(set(seen)) == 8 * 200
