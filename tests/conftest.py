"""Pytest configuration and fixtures."""

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Generator

import pytest

# Set test environment
os.environ.pop("GANTTIEK_CONFIG_PATH", None)
os.environ["LOG_LEVEL"] = "WARNING"

DAY0 = datetime(2025, 3, 3)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def day0() -> datetime:
    """Anchor instant (midnight) for day-based scenarios."""
    return DAY0


@pytest.fixture
def day() -> Callable[[float], datetime]:
    """Instant ``n`` days after the anchor."""
    def _day(n: float) -> datetime:
        return DAY0 + timedelta(days=n)
    return _day
