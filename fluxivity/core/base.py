"""
Fluxivity BaseCell - Shared Infrastructure for Reactive Cells
=============================================================

BaseCell holds everything Reactive and Computed have in common:

- the current value and its equality-based change detection
- the ordered middleware pipeline
- a replay-latest ChangeChannel for Snapshots
- a composed BatchBuffer deciding when Snapshots are published
- subscription helpers and the dispose lifecycle

Subclasses decide where new values come from (external writes for Reactive,
recomputation for Computed) and hand every candidate transition to
``_accept``, which runs the pipeline:

    before_update hooks -> replace value -> after_update hooks
        -> should_emit vote (AND) -> buffer or publish Snapshot

Callers are responsible for filtering out equal values before calling
``_accept``; the pipeline itself assumes the value really changes.
"""

import logging
from abc import ABC
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from rx.core import Observable
from rx.disposable import Disposable

from ..exceptions import DisposedError
from ..middleware.base import Middleware
from .batch import BatchBuffer
from .channel import ChangeChannel
from .snapshot import Snapshot

T = TypeVar("T")

logger = logging.getLogger(__name__)


def values_equal(a: Any, b: Any) -> bool:
    """Value equality used for change detection, short-circuited by identity."""
    return a is b or a == b


class BaseCell(ABC, Generic[T]):
    """
    Abstract base class for observable, equality-deduplicated value cells.

    A cell starts with a self-referential Snapshot ``(initial, initial)`` on its
    channel, so every subscriber, early or late, first receives the state the
    cell is currently in and then each accepted change in order.
    """

    def __init__(
        self,
        initial_value: T,
        middlewares: Optional[List[Middleware[T]]] = None,
        name: Optional[str] = None,
    ) -> None:
        self._name = name or "<unnamed>"
        self._value = initial_value
        # Shared with the caller, never mutated here.
        self._middlewares: List[Middleware[T]] = (
            middlewares if middlewares is not None else []
        )
        self._channel: ChangeChannel[T] = ChangeChannel(
            Snapshot(initial_value, initial_value)
        )
        self._batch: BatchBuffer[T] = BatchBuffer(self._channel.publish)
        self._disposed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> T:
        """The current value. Reading never triggers computation."""
        return self._value

    @property
    def middlewares(self) -> List[Middleware[T]]:
        return self._middlewares

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_batching(self) -> bool:
        return self._batch.is_batching

    @property
    def stream(self) -> Observable:
        """
        The cell's Snapshot stream as an rx Observable.

        Subscribing replays the latest published Snapshot first.

        Raises:
            DisposedError: If the cell has been disposed.
        """
        self._check_alive("access the stream of")
        return self._channel.observable

    def subscribe(
        self,
        on_next: Callable[[Snapshot[T]], None],
        on_completed: Optional[Callable[[], None]] = None,
    ) -> Disposable:
        """
        Subscribe to the cell's Snapshots.

        ``on_next`` is called at once with the latest Snapshot, then with each
        Snapshot the cell publishes, until the returned handle is disposed or
        the cell itself is disposed (at which point ``on_completed`` fires).

        Args:
            on_next: Called with each Snapshot.
            on_completed: Called once when the cell is disposed.

        Returns:
            A Disposable; ``dispose()`` stops delivery to this listener only.

        Raises:
            DisposedError: If the cell has been disposed.
        """
        self._check_alive("subscribe to")
        return self._channel.subscribe(on_next, on_completed)

    def add_effect(self, effect: Callable[[Snapshot[T]], None]) -> Disposable:
        """Run ``effect`` for the current state and every later change."""
        return self.subscribe(effect)

    def start_batch(self) -> None:
        """Begin buffering Snapshots. Batches nest."""
        self._batch.start()

    def end_batch(self, publish_all: bool = False) -> None:
        """
        Close one batch level.

        When the outermost batch closes, publish the last buffered Snapshot,
        or every buffered Snapshot in order if ``publish_all`` is true.
        Calling this outside a batch does nothing.
        """
        self._batch.end(publish_all=publish_all)

    @contextmanager
    def batch(self, publish_all: bool = False) -> Iterator["BaseCell[T]"]:
        """
        Context manager form of ``start_batch`` / ``end_batch``.

        Example:
            ```python
            with counter.batch():
                counter.value = 1
                counter.value = 2
            # subscribers see only 2
            ```
        """
        self.start_batch()
        try:
            yield self
        finally:
            self.end_batch(publish_all=publish_all)

    def dispose(self) -> None:
        """
        Tear the cell down: drop pending batches and complete the channel.

        Disposing twice is harmless. Afterwards value-changing writes and new
        subscriptions raise DisposedError; reading ``value`` still works.
        """
        if self._disposed:
            return
        self._disposed = True
        self._batch.reset()
        self._channel.close()
        logger.debug(f"Disposed {self!r}")

    def _check_alive(self, operation: str) -> None:
        if self._disposed:
            raise DisposedError(self._name, operation)

    def _accept(self, old_value: T, new_value: T) -> None:
        for middleware in self._middlewares:
            middleware.before_update(old_value, new_value)

        self._value = new_value

        for middleware in self._middlewares:
            middleware.after_update(old_value, new_value)

        # Every middleware votes, even after a veto.
        votes = [
            middleware.should_emit(old_value, new_value)
            for middleware in self._middlewares
        ]
        if all(votes):
            self._batch.offer(Snapshot(old_value, new_value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {self._value!r})"
