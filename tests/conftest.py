"""Make ``flow_app`` importable from a plain checkout and share log capture setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def flow_logs(caplog):
    """Capture flow_app log records at DEBUG and above."""
    caplog.set_level(logging.DEBUG, logger="flow_app")
    return caplog
