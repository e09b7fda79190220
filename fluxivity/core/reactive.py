"""
Fluxivity Reactive - Writable Observable Value
==============================================

A Reactive cell holds a value that callers replace by assignment. Each write
that changes the value (by ``==``) runs the middleware pipeline and publishes a
Snapshot to subscribers, unless a middleware vetoes it or a batch is open.

Example:
    ```python
    from fluxivity import Reactive

    count = Reactive(0)
    seen = []
    count.add_effect(lambda snap: seen.append(snap.new_value))

    count.value = 1
    count.value = 1  # equal value, ignored
    count.set(2)

    assert seen == [0, 1, 2]
    ```
"""

from typing import List, Optional, TypeVar

from ..middleware.base import Middleware
from .base import BaseCell, values_equal

T = TypeVar("T")


class Reactive(BaseCell[T]):
    """
    A value that can be observed and modified.

    Args:
        value: The initial value.
        middlewares: Ordered middleware run on every accepted change.
        name: Optional label used in reprs, logs and errors.
    """

    def __init__(
        self,
        value: T,
        middlewares: Optional[List[Middleware[T]]] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(value, middlewares, name)

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    def set(self, new_value: T) -> "Reactive[T]":
        """
        Replace the value and notify subscribers.

        Writing a value equal to the current one does nothing at all.

        Returns:
            This cell, for chaining.

        Raises:
            DisposedError: If the cell has been disposed.
        """
        self._check_alive("write to")
        if values_equal(new_value, self._value):
            return self

        self._accept(self._value, new_value)
        return self
