"""
Fluxivity LoggingMiddleware
===========================

Reports every update a cell goes through to a standard-library logger.
Updates are logged at the configured level (``log_level`` in the fluxivity
config, DEBUG by default); recomputation errors are logged at ERROR with the
traceback attached. It never vetoes an emission.
"""

import logging
from typing import Optional, TypeVar

from ..config import get_config
from .base import Middleware

T = TypeVar("T")


class LoggingMiddleware(Middleware[T]):
    """
    Log before/after updates and errors.

    Args:
        logger: Logger to write to. Defaults to this module's logger.
        level: Level for update messages. Defaults to the configured level.
        label: Prefix identifying the cell(s) in messages.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        level: Optional[int] = None,
        label: str = "fluxivity",
    ) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._level = level
        self._label = label

    @property
    def level(self) -> int:
        return self._level if self._level is not None else get_config().log_level

    def before_update(self, old_value: T, new_value: T) -> None:
        self._logger.log(
            self.level, f"[{self._label}] Before update: {old_value!r} -> {new_value!r}"
        )

    def after_update(self, old_value: T, new_value: T) -> None:
        self._logger.log(
            self.level, f"[{self._label}] After update: {old_value!r} -> {new_value!r}"
        )

    def on_error(self, error: Exception) -> None:
        self._logger.error(f"[{self._label}] Error: {error}", exc_info=error)

    def should_emit(self, old_value: T, new_value: T) -> bool:
        return True
