"""Unified logging utilities for logwatch."""
from __future__ import annotations

import json
import logging
import os
import sys
import time

from .env_flags import is_truthy_env

DEFAULT_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'

# Records shipped by the log sink are already structured; keep them message-only.
EXPORT_LOGGER_PREFIX = 'logwatch.export'
EXPORT_FORMAT = '%(message)s'


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            'ts': getattr(record, 'created', time.time()),
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _close_handlers(logger: logging.Logger) -> None:
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        try:
            h.flush()
            h.close()
        except (OSError, ValueError):
            pass


def setup_logging(level: str = 'INFO', log_file: str | None = None, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure root logging.

    Console handler uses `fmt` (DEFAULT_FORMAT unless overridden); set
    LOGWATCH_JSON_LOGS=1 to emit one JSON object per line instead.

    File handler (if `log_file` given) always uses DEFAULT_FORMAT.
    Safe to call repeatedly: existing root handlers are replaced.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    _close_handlers(root)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)
    if is_truthy_env('LOGWATCH_JSON_LOGS'):
        console.setFormatter(_JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(fmt))
    root.addHandler(console)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding='utf-8')
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        root.addHandler(fh)

    # Exported records go out verbatim on their own handler
    export_logger = logging.getLogger(EXPORT_LOGGER_PREFIX)
    _close_handlers(export_logger)
    export_handler = logging.StreamHandler(sys.stdout)
    export_handler.setFormatter(logging.Formatter(EXPORT_FORMAT))
    export_logger.addHandler(export_handler)
    export_logger.setLevel(logging.INFO)
    export_logger.propagate = False

    return root

__all__ = ["setup_logging", "DEFAULT_FORMAT", "EXPORT_LOGGER_PREFIX"]
