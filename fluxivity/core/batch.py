"""
Fluxivity BatchBuffer - Nested Batch Update State Machine
=========================================================

A BatchBuffer sits between a cell's update pipeline and its ChangeChannel.
Outside a batch every Snapshot offered to it is published at once. Inside a
batch Snapshots are held back and flushed when the outermost batch ends.

States:
    idle      depth == 0, offers publish immediately
    batching  depth > 0, offers are buffered

Batches nest: only the ``end()`` that brings the depth back to zero flushes.
By default the flush publishes just the last buffered Snapshot; with
``publish_all=True`` every buffered Snapshot is published in order.

Reactive and Computed each compose one BatchBuffer rather than inheriting the
counter and buffer logic.
"""

import logging
from typing import Callable, Generic, List, TypeVar

from .snapshot import Snapshot

T = TypeVar("T")

logger = logging.getLogger(__name__)


class BatchBuffer(Generic[T]):
    """Depth counter plus an ordered buffer of Snapshots awaiting publication."""

    def __init__(self, publish: Callable[[Snapshot[T]], None]) -> None:
        self._publish = publish
        self._depth = 0
        self._buffered: List[Snapshot[T]] = []

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def is_batching(self) -> bool:
        return self._depth > 0

    @property
    def pending(self) -> List[Snapshot[T]]:
        """Copy of the Snapshots buffered so far."""
        return list(self._buffered)

    def start(self) -> None:
        self._depth += 1

    def offer(self, snapshot: Snapshot[T]) -> None:
        if self._depth > 0:
            self._buffered.append(snapshot)
        else:
            self._publish(snapshot)

    def end(self, publish_all: bool = False) -> None:
        if self._depth == 0:
            return

        self._depth -= 1
        if self._depth > 0 or not self._buffered:
            return

        # Listeners may open a new batch during the flush.
        buffered, self._buffered = self._buffered, []
        logger.debug(
            f"Flushing batch: {len(buffered)} buffered, publish_all={publish_all}"
        )
        if publish_all:
            for snapshot in buffered:
                self._publish(snapshot)
        else:
            self._publish(buffered[-1])

    def reset(self) -> None:
        """Drop the depth and any buffered Snapshots without publishing."""
        self._depth = 0
        self._buffered.clear()
