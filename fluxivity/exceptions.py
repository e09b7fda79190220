"""
Fluxivity Exceptions
====================

Errors raised by reactive cells. Recomputation failures inside a Computed are
not represented here: they are handed to each middleware's ``on_error`` hook
and never raised to the caller.
"""


class FluxivityError(Exception):
    """Base class for all errors raised by fluxivity."""

    pass


class DisposedError(FluxivityError):
    """Raised when a disposed cell is written to or subscribed to."""

    def __init__(self, cell_name: str, operation: str):
        self.cell_name = cell_name
        self.operation = operation
        super().__init__(f"Cannot {operation} '{cell_name}': cell has been disposed")
