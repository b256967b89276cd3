from __future__ import annotations

import threading

from .models import SnapshotKey, WatchSnapshot


class SnapshotStore:
    """Latest WatchSnapshot per (pipeline, source), guarded by one lock.

    Writers (bus publishers) and the export loop run on different threads;
    every public operation takes the lock, and `drain` reads and clears in a
    single critical section so no write can fall between the two.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[SnapshotKey, WatchSnapshot] = {}

    def upsert(self, snapshot: WatchSnapshot) -> None:
        with self._lock:
            self._data[snapshot.key] = snapshot

    def get(self, key: SnapshotKey) -> WatchSnapshot | None:
        with self._lock:
            return self._data.get(key)

    def snapshot(self) -> dict[SnapshotKey, WatchSnapshot]:
        with self._lock:
            return dict(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def drain(self) -> dict[SnapshotKey, WatchSnapshot]:
        """Return everything accumulated so far and start an empty window."""
        with self._lock:
            taken = self._data
            self._data = {}
        return taken

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


__all__ = ["SnapshotStore"]
