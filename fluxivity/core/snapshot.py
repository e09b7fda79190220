"""
Fluxivity Snapshot - One Accepted Transition
============================================

A Snapshot pairs the value a cell held before an accepted change with the value
it holds afterwards. Snapshots are what listeners and effects receive.

Example:
    ```python
    counter = Reactive(0)
    counter.add_effect(
        lambda snap: print(f"{snap.old_value} -> {snap.new_value}")
    )  # prints "0 -> 0" (replay of the current state)

    counter.value = 1  # prints "0 -> 1"
    ```
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """Immutable (old value, new value) pair."""

    old_value: T
    """The value before the transition."""

    new_value: T
    """The value after the transition."""

    @property
    def changed(self) -> bool:
        """False for the self-referential snapshot a cell starts with."""
        return not (
            self.old_value is self.new_value or self.old_value == self.new_value
        )

    def __repr__(self) -> str:
        return f"Snapshot(old={self.old_value!r}, new={self.new_value!r})"
