"""Shared pytest fixtures and configuration."""

import logging
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import LogCapture

from locus.config import Settings
from locus.geometry import Point3D


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Reset structlog configuration, bound context and root level between tests."""
    root_level = logging.getLogger().level
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    logging.getLogger().setLevel(root_level)


@pytest.fixture
def log_output() -> LogCapture:
    """Capture log events with bound context variables merged in."""
    capture = LogCapture()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
    )
    return capture


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        PROXIMITY_METRIC="euclidean",
        PROXIMITY_THRESHOLD=5.0,
    )


@pytest.fixture
def origin() -> Point3D[int]:
    """The integer origin."""
    return Point3D.from_tuple((0, 0, 0))
