"""Log sinks for per-cycle structured records.

A sink receives one opaque byte blob per topic per export cycle. The default
`LoggerSink` writes it as a single INFO line on `logwatch.export.<topic>`,
which `setup_logging` routes to a message-only handler.
"""
from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from logwatch.utils.logging_utils import EXPORT_LOGGER_PREFIX


@runtime_checkable
class LogSink(Protocol):
    def export(self, topic: str, data: bytes) -> None: ...


class LoggerSink:
    def __init__(self, prefix: str = EXPORT_LOGGER_PREFIX, level: int = logging.INFO) -> None:
        self._prefix = prefix
        self._level = level

    def export(self, topic: str, data: bytes) -> None:
        logging.getLogger(f"{self._prefix}.{topic}").log(self._level, "%s", data.decode("utf-8"))


class MemorySink:
    """Keeps exported blobs in order; used by tests and ad-hoc inspection."""

    def __init__(self) -> None:
        self.records: list[tuple[str, bytes]] = []

    def export(self, topic: str, data: bytes) -> None:
        self.records.append((topic, data))


__all__ = ["LogSink", "LoggerSink", "MemorySink"]
