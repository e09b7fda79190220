"""
Shared pytest fixtures and configuration for fluxivity tests.
"""

import pytest

from fluxivity.config import _reset_config
from tests.utils import RecordingMiddleware, SnapshotRecorder


@pytest.fixture(autouse=True)
def reset_config():
    """Reset the global configuration before each test to prevent state leakage."""
    _reset_config()
    yield
    _reset_config()


@pytest.fixture
def recorder():
    """Provide a fresh listener that records Snapshots."""
    return SnapshotRecorder()


@pytest.fixture
def middleware():
    """Provide a fresh middleware that records its hook calls."""
    return RecordingMiddleware()
