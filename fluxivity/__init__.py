"""
Fluxivity - Reactive Cells for Python
=====================================

A small reactive-computation runtime: observable value cells that propagate
changes to derived values and listeners.

- ``Reactive``: a writable value; equal writes are ignored
- ``Computed``: a value derived from other cells, recomputed on change
- ``memoize``: an LRU cache over a Computed keyed by its source values
- ``Middleware``: hooks run around every accepted change
- batching on every cell, nestable, via ``start_batch``/``end_batch`` or
  ``with cell.batch():``

Example:
    ```python
    from fluxivity import Computed, Reactive

    count = Reactive(0)
    message = Reactive("Hello")
    display = Computed(
        [count, message], lambda s: f"{s[1].value} ({s[0].value})"
    )

    count.value = 1
    print(display.value)  # "Hello (1)"
    ```
"""

__version__ = "0.1.0"

from .config import FluxivityConfig, configure, get_config
from .core import (
    BaseCell,
    BatchBuffer,
    ChangeChannel,
    Computed,
    MemoizedComputed,
    Reactive,
    Snapshot,
    ValueCell,
    fingerprint,
    memoize,
)
from .exceptions import DisposedError, FluxivityError
from .middleware import LoggingMiddleware, Middleware, ValidationMiddleware
from .reactive_collections import reactive_dict, reactive_list, reactive_set

__all__ = [
    # Cells
    "BaseCell",
    "Reactive",
    "Computed",
    "MemoizedComputed",
    "memoize",
    "fingerprint",
    "Snapshot",
    "ValueCell",
    # Building blocks
    "BatchBuffer",
    "ChangeChannel",
    # Middleware
    "Middleware",
    "LoggingMiddleware",
    "ValidationMiddleware",
    # Collections
    "reactive_list",
    "reactive_dict",
    "reactive_set",
    # Configuration
    "FluxivityConfig",
    "configure",
    "get_config",
    # Exceptions
    "FluxivityError",
    "DisposedError",
]
