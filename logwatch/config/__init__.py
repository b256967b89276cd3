from .settings import (
    DEFAULT_PERIOD,
    DEFAULT_UNFINISHED_TIMEOUT,
    FileWatcherConfig,
    load_config,
    parse_duration,
)

__all__ = [
    "DEFAULT_PERIOD",
    "DEFAULT_UNFINISHED_TIMEOUT",
    "FileWatcherConfig",
    "load_config",
    "parse_duration",
]
