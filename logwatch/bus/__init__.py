"""In-process event bus used to deliver source watch snapshots."""
from .event import FILE_WATCHER_TOPIC, Event, WatchFileInfo, WatchMetricData
from .in_memory_bus import EventBus, Listener

__all__ = [
    "FILE_WATCHER_TOPIC",
    "Event",
    "EventBus",
    "Listener",
    "WatchFileInfo",
    "WatchMetricData",
]
