"""logwatch exception hierarchy.

A small exception tree used to separate wiring mistakes (which must fail
loudly) from export failures (which are logged and absorbed by the export
loop).
"""
from __future__ import annotations


class LogwatchError(Exception):
    """Base class for all logwatch exceptions."""


class ConfigError(LogwatchError):
    """Configuration-related issues (missing/invalid keys, bad durations)."""


class ListenerRegistrationError(LogwatchError):
    """Bus wiring problems (duplicate listener names, unknown listeners)."""


class EventPayloadError(LogwatchError, TypeError):
    """An event arrived on a topic with a payload of the wrong type.

    Indicates a routing bug upstream; never swallowed.
    """


class ExportError(LogwatchError):
    """A single export cycle could not publish one of its outputs."""


class LogSerializationError(ExportError):
    """The accumulated state could not be serialized for the log sink."""


__all__ = [
    "LogwatchError",
    "ConfigError",
    "ListenerRegistrationError",
    "EventPayloadError",
    "ExportError",
    "LogSerializationError",
]
