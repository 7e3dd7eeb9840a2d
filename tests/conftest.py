"""Shared test fixtures for slogkit."""

import io
from datetime import datetime, timezone

import pytest


@pytest.fixture
def sink() -> io.BytesIO:
    """Return an in-memory byte sink for handler output."""
    return io.BytesIO()


@pytest.fixture
def fixed_time() -> datetime:
    """Return a fixed UTC timestamp with sub-millisecond precision."""
    return datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
