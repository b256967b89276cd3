"""Pytest configuration & shared fixtures for logwatch.

Responsibilities:
1. Ensure project root on sys.path.
2. Provide an isolated Prometheus registry per test so collector assertions
   never see series registered by other tests.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

import pytest
from prometheus_client import CollectorRegistry

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from logwatch.utils.logging_utils import EXPORT_LOGGER_PREFIX  # noqa: E402
from tests._helpers import NOW  # noqa: E402


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture()
def restore_logging():
    """Drop handlers installed by setup_logging within a test and restore levels.

    pytest's own capture handlers are subclasses and are left to pytest.
    """
    root = logging.getLogger()
    export = logging.getLogger(EXPORT_LOGGER_PREFIX)
    saved = (root.level, export.level, export.propagate)
    yield
    for lg in (root, export):
        for h in lg.handlers[:]:
            if type(h) in (logging.StreamHandler, logging.FileHandler):
                lg.removeHandler(h)
                h.close()
    root.setLevel(saved[0])
    export.setLevel(saved[1])
    export.propagate = saved[2]
