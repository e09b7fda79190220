"""
Fluxivity Middleware - Update Interception Contract
===================================================

Middleware lets callers observe and filter the updates of a cell without
subclassing it. A cell takes an ordered list of middleware at construction and
drives every entry through the same four hooks:

- ``before_update(old, new)`` runs before the stored value is replaced
- ``after_update(old, new)`` runs after the stored value is replaced
- ``should_emit(old, new)`` votes on whether the Snapshot is published; the
  votes of all middleware are combined with AND, so any one can veto
- ``on_error(error)`` receives exceptions raised by a Computed's compute
  function

Hooks run in list order. Exceptions raised by ``before_update`` or
``after_update`` are not caught: they propagate to whoever wrote the value.

A single middleware instance may be attached to many cells, so it should not
keep state that belongs to one particular cell.

Example:
    ```python
    class ClampWarning(Middleware[int]):
        def before_update(self, old_value, new_value):
            pass

        def after_update(self, old_value, new_value):
            pass

        def on_error(self, error):
            pass

        def should_emit(self, old_value, new_value):
            return 0 <= new_value <= 100

    level = Reactive(50, middlewares=[ClampWarning()])
    level.value = 150  # stored, but not published
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Middleware(ABC, Generic[T]):
    """Abstract base for the four-hook update interception contract."""

    @abstractmethod
    def before_update(self, old_value: T, new_value: T) -> None:
        pass

    @abstractmethod
    def after_update(self, old_value: T, new_value: T) -> None:
        pass

    @abstractmethod
    def on_error(self, error: Exception) -> None:
        pass

    @abstractmethod
    def should_emit(self, old_value: T, new_value: T) -> bool:
        pass
