"""Central version metadata for logwatch.

Resolution order for get_version():
1. Env override LOGWATCH_VERSION (e.g., injected by CI)
2. __version__ constant below
"""
from __future__ import annotations

import os

__version__ = "0.1.0"

def get_version() -> str:
    return os.environ.get("LOGWATCH_VERSION", __version__)

__all__ = ["__version__", "get_version"]
