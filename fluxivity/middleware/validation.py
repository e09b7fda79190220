"""
Fluxivity ValidationMiddleware
==============================

Keeps invalid values from reaching subscribers. The value is still stored (the
pipeline has already replaced it when ``should_emit`` is asked), but the
Snapshot is not published while the predicate rejects the new value.
"""

import logging
from typing import Callable, List, TypeVar

from .base import Middleware

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ValidationMiddleware(Middleware[T]):
    """
    Veto emission of values that fail ``predicate``.

    Errors handed to ``on_error`` are kept in ``errors`` in arrival order, so
    callers can inspect why a Computed stopped updating.

    Example:
        ```python
        non_negative = ValidationMiddleware(lambda v: v >= 0)
        balance = Reactive(10, middlewares=[non_negative])
        balance.value = -5   # stored, not published
        ```
    """

    def __init__(self, predicate: Callable[[T], bool], message: str = "invalid value"):
        self._predicate = predicate
        self._message = message
        self.errors: List[Exception] = []

    def before_update(self, old_value: T, new_value: T) -> None:
        pass

    def after_update(self, old_value: T, new_value: T) -> None:
        pass

    def on_error(self, error: Exception) -> None:
        self.errors.append(error)

    def should_emit(self, old_value: T, new_value: T) -> bool:
        if self._predicate(new_value):
            return True
        logger.debug(f"Suppressed {new_value!r}: {self._message}")
        return False
