"""
Fluxivity Cell Protocols
========================

Structural interfaces shared by the cell types.

``ValueCell`` is what a Computed needs from each of its sources: a current
value and a replaying stream of Snapshots. Reactive, Computed and
MemoizedComputed all satisfy it, so sources of different element types can be
mixed freely in one Computed; the compute function is responsible for the
types it reads.
"""

from typing import Any, Protocol, runtime_checkable

from rx.core import Observable


@runtime_checkable
class ValueCell(Protocol):
    """A cell exposing its current value and its Snapshot stream."""

    @property
    def value(self) -> Any:
        ...

    @property
    def stream(self) -> Observable:
        ...
