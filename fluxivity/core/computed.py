"""
Fluxivity Computed - Derived Values over Multiple Sources
=========================================================

A Computed cell derives its value from an ordered list of source cells with a
compute function. It evaluates the function once at construction, then
listens to the merged change streams of all its sources and re-evaluates on
every emission from any of them.

Recomputation rules:

1. If the compute function raises, every middleware's ``on_error`` receives the
   exception and the cell keeps its previous value. Nothing is published.
2. If the new result equals the current value, nothing happens.
3. Otherwise the result goes through the same middleware pipeline, batching
   and publication as a Reactive write.

Emissions are not coalesced: changing two sources back to back triggers two
recomputations. Wrap bursts of writes in a batch on the Computed to publish
only the final result.

Example:
    ```python
    from fluxivity import Computed, Reactive

    first = Reactive("Ada")
    last = Reactive("Lovelace")
    full = Computed([first, last], lambda s: f"{s[0].value} {s[1].value}")

    print(full.value)  # "Ada Lovelace"
    first.value = "Augusta"
    print(full.value)  # "Augusta Lovelace"
    ```

Sources are fixed at construction and must already exist, so the dependency
graph cannot contain a cycle.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from rx.disposable import Disposable

from ..middleware.base import Middleware
from .base import BaseCell, values_equal
from .channel import merge_changes
from .protocols import ValueCell
from .snapshot import Snapshot

T = TypeVar("T")

logger = logging.getLogger(__name__)

ComputeFunction = Callable[[Sequence[ValueCell]], T]


class Computed(BaseCell[T]):
    """
    A read-only cell whose value is recomputed when any source changes.

    Args:
        sources: Cells the value depends on. Each must expose ``value`` and
            ``stream``; element types may differ.
        compute: Called with the tuple of sources, returns the new value.
            Exceptions raised during construction propagate to the caller.
        middlewares: Ordered middleware run on every accepted change and
            handed recomputation errors.
        name: Optional label used in reprs, logs and errors.
    """

    def __init__(
        self,
        sources: Sequence[ValueCell],
        compute: ComputeFunction,
        middlewares: Optional[List[Middleware[T]]] = None,
        name: Optional[str] = None,
    ) -> None:
        self._sources: Tuple[ValueCell, ...] = tuple(sources)
        self._compute = compute
        super().__init__(compute(self._sources), middlewares, name)

        self._subscription: Optional[Disposable] = merge_changes(
            [source.stream for source in self._sources], self._on_source_change
        )

    @property
    def sources(self) -> Tuple[ValueCell, ...]:
        return self._sources

    def _on_source_change(self, _snapshot: Snapshot) -> None:
        if self._disposed:
            return

        try:
            new_value = self._compute(self._sources)
        except Exception as error:
            logger.debug(f"Recomputation of '{self._name}' failed: {error!r}")
            for middleware in self._middlewares:
                middleware.on_error(error)
            return

        if values_equal(new_value, self._value):
            return

        self._accept(self._value, new_value)

    def dispose(self) -> None:
        """Detach from the sources and close the channel. Sources stay alive."""
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        super().dispose()
