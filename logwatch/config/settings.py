#!/usr/bin/env python3
"""File-watcher listener settings.

Single-pass hydration object for the export listener. Values come from a
mapping (usually the `filewatcher` section of a YAML config file) and may be
overridden from the environment:

  LOGWATCH_FILEWATCHER_PERIOD=5m                 Export cadence.
  LOGWATCH_FILEWATCHER_UNFINISHED_TIMEOUT=24h    Staleness threshold for the
                                                 `unfinished` file status.

Durations accept Go-style strings ("300ms", "1.5s", "5m", "24h", "1h30m")
or bare numbers interpreted as seconds.
"""
from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from logwatch.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

__all__ = [
    "FileWatcherConfig",
    "parse_duration",
    "load_config",
    "DEFAULT_PERIOD",
    "DEFAULT_UNFINISHED_TIMEOUT",
]

DEFAULT_PERIOD = timedelta(minutes=5)
DEFAULT_UNFINISHED_TIMEOUT = timedelta(hours=24)

ENV_PERIOD = 'LOGWATCH_FILEWATCHER_PERIOD'
ENV_UNFINISHED_TIMEOUT = 'LOGWATCH_FILEWATCHER_UNFINISHED_TIMEOUT'

_UNIT_SECONDS = {
    'ns': 1e-9,
    'us': 1e-6,
    'µs': 1e-6,
    'ms': 1e-3,
    's': 1.0,
    'm': 60.0,
    'h': 3600.0,
}
_DURATION_PART = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)')


def parse_duration(value: Any) -> timedelta:
    """Parse a duration value into a timedelta.

    Raises ConfigError on unparseable input.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ConfigError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return _seconds(value, value)
    if not isinstance(value, str):
        raise ConfigError(f"invalid duration: {value!r}")
    text = value.strip()
    if not text:
        raise ConfigError("invalid duration: empty string")
    try:
        number = float(text)
    except ValueError:
        pass
    else:
        return _seconds(number, value)
    sign = 1.0
    if text[0] in '+-':
        sign = -1.0 if text[0] == '-' else 1.0
        text = text[1:]
    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    if pos != len(text) or pos == 0:
        raise ConfigError(f"invalid duration: {value!r}")
    return _seconds(sign * total, value)


def _seconds(seconds: float, original: Any) -> timedelta:
    try:
        return timedelta(seconds=float(seconds))
    except (OverflowError, ValueError) as e:
        raise ConfigError(f"invalid duration: {original!r}") from e


@dataclass(frozen=True, slots=True)
class FileWatcherConfig:
    period: timedelta = DEFAULT_PERIOD
    unfinished_timeout: timedelta = DEFAULT_UNFINISHED_TIMEOUT

    def __post_init__(self) -> None:
        if self.period <= timedelta(0):
            raise ConfigError(f"period must be positive, got {self.period}")
        if self.unfinished_timeout < timedelta(0):
            raise ConfigError(f"checkUnFinishedTimeout must not be negative, got {self.unfinished_timeout}")

    @property
    def period_seconds(self) -> float:
        return self.period.total_seconds()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None, env: Mapping[str, str] | None = None) -> FileWatcherConfig:
        """Build settings from a config section, then apply env overrides.

        Keys follow the config file naming: `period`, `checkUnFinishedTimeout`.
        Unknown keys are ignored with a warning.
        """
        raw = dict(raw or {})
        e = env if env is not None else os.environ
        unknown = set(raw) - {'period', 'checkUnFinishedTimeout'}
        if unknown:
            logger.warning("filewatcher config: ignoring unknown keys %s", ",".join(sorted(unknown)))
        period = raw.get('period', DEFAULT_PERIOD)
        timeout = raw.get('checkUnFinishedTimeout', DEFAULT_UNFINISHED_TIMEOUT)
        if e.get(ENV_PERIOD):
            period = e[ENV_PERIOD]
        if e.get(ENV_UNFINISHED_TIMEOUT):
            timeout = e[ENV_UNFINISHED_TIMEOUT]
        return cls(period=parse_duration(period), unfinished_timeout=parse_duration(timeout))

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> FileWatcherConfig:
        return cls.from_mapping({}, env=env)


def load_config(path: str | os.PathLike[str], *, section: str = 'filewatcher',
                env: Mapping[str, str] | None = None) -> FileWatcherConfig:
    """Load listener settings from the `section` mapping of a YAML file.

    A missing section yields defaults (plus env overrides).
    """
    p = Path(path)
    try:
        with p.open(encoding='utf-8') as fh:
            doc = yaml.safe_load(fh)
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {p}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"config file {p} is not valid YAML: {e}") from e
    if doc is None:
        doc = {}
    if not isinstance(doc, Mapping):
        raise ConfigError(f"config file {p} must contain a mapping at top level")
    sect = doc.get(section)
    if sect is not None and not isinstance(sect, Mapping):
        raise ConfigError(f"config section {section!r} must be a mapping")
    cfg = FileWatcherConfig.from_mapping(sect, env=env)
    logger.info(
        "filewatcher.config.loaded path=%s period=%ss unfinished_timeout=%ss",
        p, cfg.period.total_seconds(), cfg.unfinished_timeout.total_seconds(),
    )
    return cfg
