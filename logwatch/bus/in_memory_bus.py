from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from logwatch.utils.exceptions import ListenerRegistrationError

from .event import Event

logger = logging.getLogger(__name__)


@runtime_checkable
class Listener(Protocol):
    """Lifecycle + delivery surface every bus listener exposes."""

    @property
    def name(self) -> str: ...

    def init(self, context: Any = None) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def subscribe(self, event: Event) -> None: ...


class EventBus:
    """Topic-based synchronous dispatcher.

    `publish` delivers in the publisher's thread; many publishers may call it
    concurrently. Listener exceptions are not caught here: a listener that
    rejects an event is a wiring bug and the publisher must see it.
    """

    def __init__(self, name: str = 'core'):
        self.name = name
        self._lock = threading.RLock()
        self._listeners: dict[str, Listener] = {}
        self._topics: dict[str, list[str]] = {}
        self._published = 0

    def register(self, listener: Listener, topics: Sequence[str] | None = None) -> None:
        if topics is None:
            topics = tuple(getattr(listener, 'topics', ()))
        if not topics:
            raise ListenerRegistrationError(f"listener {listener.name!r} registered without topics")
        with self._lock:
            if listener.name in self._listeners:
                raise ListenerRegistrationError(
                    f"listener {listener.name!r} already registered on bus {self.name!r}"
                )
            self._listeners[listener.name] = listener
            for topic in topics:
                self._topics.setdefault(topic, []).append(listener.name)
        logger.debug("bus.register bus=%s listener=%s topics=%s", self.name, listener.name, ",".join(topics))

    def unregister(self, name: str) -> Listener:
        with self._lock:
            listener = self._listeners.pop(name, None)
            if listener is None:
                raise ListenerRegistrationError(f"listener {name!r} not registered on bus {self.name!r}")
            for names in self._topics.values():
                if name in names:
                    names.remove(name)
        return listener

    def listeners(self, topic: str | None = None) -> list[Listener]:
        with self._lock:
            if topic is None:
                return list(self._listeners.values())
            return [self._listeners[n] for n in self._topics.get(topic, ())]

    def publish(self, topic: str, data: Any, meta: dict[str, Any] | None = None) -> int:
        """Deliver `data` to every listener of `topic`; returns delivery count."""
        ev = Event(topic=topic, data=data, ts_unix_ms=int(time.time() * 1000), meta=meta or {})
        targets = self.listeners(topic)
        with self._lock:
            self._published += 1
        for listener in targets:
            listener.subscribe(ev)
        return len(targets)

    def published_count(self) -> int:
        with self._lock:
            return self._published

    def init_all(self, context: Any = None) -> None:
        for listener in self.listeners():
            listener.init(context)

    def start_all(self) -> None:
        for listener in self.listeners():
            listener.start()

    def stop_all(self) -> None:
        for listener in self.listeners():
            try:
                listener.stop()
            except Exception:
                logger.exception("bus.stop failed listener=%s", listener.name)


__all__ = ["EventBus", "Listener"]
