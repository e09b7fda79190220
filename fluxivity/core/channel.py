"""
Fluxivity ChangeChannel - Replay-Latest Broadcast of Snapshots
==============================================================

Every cell owns one ChangeChannel. The channel is a thin layer over RxPY's
``BehaviorSubject``: it multicasts each published Snapshot to the current
subscribers in subscription order, and replays the most recent Snapshot to any
subscriber that joins later.

A Snapshot published while the channel is still delivering an earlier one
(for example by a listener writing back to the same cell) is queued and
delivered once every subscriber has seen the earlier one, so all subscribers
observe the same order.

``merge_changes`` combines the channels of several cells into one stream. The
replayed Snapshot of each source is skipped, so a subscriber to the merged
stream only sees changes published after it joined.
"""

from collections import deque
from typing import Callable, Deque, Generic, Iterable, Optional, TypeVar

import rx
from rx import operators as ops
from rx.core import Observable
from rx.disposable import Disposable
from rx.scheduler import ImmediateScheduler
from rx.subject import BehaviorSubject

from .snapshot import Snapshot

T = TypeVar("T")


class ChangeChannel(Generic[T]):
    """
    Replay-one multicast channel of Snapshots.

    The channel is seeded with a Snapshot at construction, so it always has a
    latest element to replay. Closing the channel completes every subscriber
    and releases them; a closed channel cannot be reopened.
    """

    def __init__(self, initial: Snapshot[T]) -> None:
        self._subject: BehaviorSubject = BehaviorSubject(initial)
        self._closed = False
        self._pending: Deque[Snapshot[T]] = deque()
        self._is_delivering = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def latest(self) -> Snapshot[T]:
        """The Snapshot a new subscriber would receive first."""
        return self._subject.value

    @property
    def observable(self) -> Observable:
        """The channel as an rx Observable, including the replayed Snapshot."""
        return self._subject

    def publish(self, snapshot: Snapshot[T]) -> None:
        self._pending.append(snapshot)

        # Only the outermost call delivers
        if self._is_delivering:
            return

        self._is_delivering = True
        try:
            while self._pending and not self._closed:
                self._subject.on_next(self._pending.popleft())
        finally:
            self._is_delivering = False
            self._pending.clear()

    def subscribe(
        self,
        on_next: Callable[[Snapshot[T]], None],
        on_completed: Optional[Callable[[], None]] = None,
    ) -> Disposable:
        return self._subject.subscribe(
            on_next=on_next,
            on_completed=on_completed,
            scheduler=ImmediateScheduler(),
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._subject.on_completed()
        self._subject.dispose()


def merge_changes(
    streams: Iterable[Observable],
    on_next: Callable[[Snapshot], None],
) -> Disposable:
    """
    Subscribe ``on_next`` to the interleaved changes of several cell streams.

    Each stream is expected to replay its latest Snapshot on subscription (as a
    cell's ``stream`` does); that replay is dropped. Emissions from one stream
    reach ``on_next`` in the order that stream published them.

    Returns:
        A Disposable that detaches ``on_next`` from every stream.
    """
    merged = rx.merge(*[stream.pipe(ops.skip(1)) for stream in streams])
    return merged.subscribe(on_next=on_next, scheduler=ImmediateScheduler())
