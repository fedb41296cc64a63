"""
Repository-level pytest configuration.

  - Logging is configured once per session from config/config.yaml
    (LOGGING_LEVEL and the other environment overrides apply)
  - The config singleton is rebuilt at session start so stale state from an
    earlier import never leaks into a run
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.framework.log_config import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _session_logging() -> Generator[None, None, None]:
    """Configure Loguru before any test runs."""
    ConfigLoader.reset()
    init_logger()
    yield
