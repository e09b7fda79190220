"""
Fluxivity Core
==============

The dependency/update engine: cells, snapshots, the batch state machine and
the memoizing wrapper.
"""

from .base import BaseCell, values_equal
from .batch import BatchBuffer
from .channel import ChangeChannel, merge_changes
from .computed import Computed
from .memoized import MemoizedComputed, fingerprint, memoize
from .protocols import ValueCell
from .reactive import Reactive
from .snapshot import Snapshot

__all__ = [
    "BaseCell",
    "BatchBuffer",
    "ChangeChannel",
    "Computed",
    "MemoizedComputed",
    "Reactive",
    "Snapshot",
    "ValueCell",
    "fingerprint",
    "memoize",
    "merge_changes",
    "values_equal",
]
