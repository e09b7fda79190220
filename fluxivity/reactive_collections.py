"""
Fluxivity Reactive Collections
==============================

Helpers that put a copy of a list, dict or set into a Reactive cell.

The cell only notices reassignment. Mutating the held collection in place
changes nothing observable; build a new collection and assign it:

    ```python
    todos = reactive_list(["write docs"])
    todos.value = todos.value + ["ship"]       # published
    todos.value.append("oops")                 # not published
    ```

Because change detection uses ``==``, assigning an equal collection is
ignored like any other equal value.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Set, TypeVar

from .core.reactive import Reactive
from .middleware.base import Middleware

E = TypeVar("E")
K = TypeVar("K")
V = TypeVar("V")


def reactive_list(
    items: Iterable[E] = (),
    middlewares: Optional[List[Middleware[List[E]]]] = None,
    name: Optional[str] = None,
) -> Reactive[List[E]]:
    """Reactive cell holding a new list built from ``items``."""
    return Reactive(list(items), middlewares=middlewares, name=name)


def reactive_dict(
    items: Optional[Mapping[K, V]] = None,
    middlewares: Optional[List[Middleware[Dict[K, V]]]] = None,
    name: Optional[str] = None,
) -> Reactive[Dict[K, V]]:
    """Reactive cell holding a new dict built from ``items``."""
    return Reactive(dict(items or {}), middlewares=middlewares, name=name)


def reactive_set(
    items: Iterable[E] = (),
    middlewares: Optional[List[Middleware[Set[E]]]] = None,
    name: Optional[str] = None,
) -> Reactive[Set[E]]:
    """Reactive cell holding a new set built from ``items``."""
    return Reactive(set(items), middlewares=middlewares, name=name)
