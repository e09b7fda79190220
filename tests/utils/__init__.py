"""
Test utilities for fluxivity.

This package contains shared testing utilities to help write
better, more maintainable tests.
"""

from .memory_utils import (
    assert_no_object_leak,
    count_instances,
    measure_instance_growth,
)
from .recording import RecordingMiddleware, SnapshotRecorder

__all__ = [
    "assert_no_object_leak",
    "count_instances",
    "measure_instance_growth",
    "RecordingMiddleware",
    "SnapshotRecorder",
]
