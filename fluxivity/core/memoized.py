"""
Fluxivity MemoizedComputed - LRU Cache over a Computed
======================================================

``memoize()`` wraps a Computed in a MemoizedComputed, which keeps a bounded
LRU history of ``(source values -> result)`` pairs. Reading ``value``:

1. builds a fingerprint from the current values of the Computed's sources
2. on a hit, returns the cached result and marks it most recently used
3. on a miss, reads the Computed's current value, caches it under the
   fingerprint (evicting the least recently used entry when full) and returns it

The wrapped Computed keeps recomputing eagerly on every source change whether
or not anyone reads through the wrapper; the cache never forces or skips a
recomputation. Everything except ``value`` is delegated unchanged.

Fingerprints use hashable source values directly. Unhashable containers
(lists, dicts, sets, tuples holding any of those) are frozen recursively into
hashable keys tagged with their kind, so two values share a key only when they
compare equal. Any other unhashable value is keyed by identity and only
matches the same object.

Example:
    ```python
    count = Reactive(0)
    squared = Computed([count], lambda s: s[0].value ** 2)
    cached = memoize(squared, cache_size=8)

    cached.value    # miss, caches 0 -> 0
    cached.value    # hit
    count.value = 3
    cached.value    # miss, caches 3 -> 9
    ```
"""

import logging
from collections.abc import Mapping, Sequence as SequenceABC, Set
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterator, Optional, Sequence, Tuple, TypeVar

from cachetools import LRUCache
from rx.core import Observable
from rx.disposable import Disposable

from ..config import get_config
from .computed import Computed
from .protocols import ValueCell
from .snapshot import Snapshot

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Frozen:
    """Hashable stand-in for an unhashable container."""

    kind: str
    content: Hashable


class _Identity:
    """Key matching only the very object it holds."""

    __slots__ = ("obj",)

    def __init__(self, obj: Any) -> None:
        self.obj = obj

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Identity) and other.obj is self.obj

    def __hash__(self) -> int:
        return id(self.obj)


def _freeze(value: Any) -> Hashable:
    try:
        hash(value)
    except TypeError:
        pass
    else:
        return value

    # Container keys compare equal exactly when the values do: a set matches the equal
    # frozenset, but a list never matches a tuple.
    if isinstance(value, Mapping):
        return _Frozen(
            "mapping",
            frozenset((_freeze(k), _freeze(v)) for k, v in value.items()),
        )
    if isinstance(value, Set):
        return frozenset(value)
    if isinstance(value, list):
        return _Frozen("list", tuple(_freeze(item) for item in value))
    if isinstance(value, tuple):
        return _Frozen("tuple", tuple(_freeze(item) for item in value))
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, SequenceABC):
        return _Frozen(type(value).__name__, tuple(_freeze(item) for item in value))
    return _Frozen("id", _Identity(value))


def fingerprint(sources: Sequence[ValueCell]) -> Tuple[Hashable, ...]:
    """Order-preserving composite key of the sources' current values."""
    return tuple(_freeze(source.value) for source in sources)


class MemoizedComputed:
    """
    Delegating wrapper adding an LRU cache to a Computed's ``value``.

    Args:
        computed: The Computed to wrap. It is owned by the wrapper from now on:
            disposing the wrapper disposes it.
        cache_size: Maximum number of fingerprints kept.
    """

    def __init__(self, computed: Computed, cache_size: int) -> None:
        if cache_size < 1:
            raise ValueError(f"cache_size must be at least 1, got {cache_size}")

        self._computed = computed
        self._cache: LRUCache = LRUCache(maxsize=cache_size)
        self._stats = {"hits": 0, "misses": 0, "evictions": 0}

    @property
    def value(self) -> Any:
        key = fingerprint(self._computed.sources)

        if key in self._cache:
            self._stats["hits"] += 1
            # LRUCache lookups refresh recency
            return self._cache[key]

        self._stats["misses"] += 1
        result = self._computed.value

        if len(self._cache) >= self._cache.maxsize:
            self._stats["evictions"] += 1
        self._cache[key] = result
        return result

    @property
    def computed(self) -> Computed:
        """The wrapped Computed."""
        return self._computed

    @property
    def cache_size(self) -> int:
        return int(self._cache.maxsize)

    @property
    def cached_keys(self) -> Tuple[Tuple[Hashable, ...], ...]:
        """Cached fingerprints in insertion order."""
        return tuple(self._cache.keys())

    def get_stats(self) -> Dict[str, Any]:
        """Hit, miss and eviction counters plus the current cache size."""
        stats: Dict[str, Any] = dict(self._stats)
        stats["size"] = len(self._cache)
        stats["capacity"] = self.cache_size
        reads = stats["hits"] + stats["misses"]
        stats["hit_rate"] = stats["hits"] / reads if reads > 0 else 0
        return stats

    def clear_cache(self) -> None:
        """Forget every cached entry. Counters are kept."""
        self._cache.clear()

    # Delegation to the wrapped Computed

    @property
    def name(self) -> str:
        return self._computed.name

    @property
    def sources(self) -> Tuple[ValueCell, ...]:
        return self._computed.sources

    @property
    def stream(self) -> Observable:
        return self._computed.stream

    @property
    def is_disposed(self) -> bool:
        return self._computed.is_disposed

    @property
    def is_batching(self) -> bool:
        return self._computed.is_batching

    def subscribe(
        self,
        on_next: Callable[[Snapshot], None],
        on_completed: Optional[Callable[[], None]] = None,
    ) -> Disposable:
        return self._computed.subscribe(on_next, on_completed)

    def add_effect(self, effect: Callable[[Snapshot], None]) -> Disposable:
        return self._computed.add_effect(effect)

    def start_batch(self) -> None:
        self._computed.start_batch()

    def end_batch(self, publish_all: bool = False) -> None:
        self._computed.end_batch(publish_all=publish_all)

    @contextmanager
    def batch(self, publish_all: bool = False) -> Iterator["MemoizedComputed"]:
        with self._computed.batch(publish_all=publish_all):
            yield self

    def dispose(self) -> None:
        self._computed.dispose()
        self._cache.clear()
        logger.debug(f"Disposed memoized wrapper of '{self._computed.name}'")

    def __repr__(self) -> str:
        return f"Memoized({self._computed!r})"


def memoize(computed: Computed, cache_size: Optional[int] = None) -> MemoizedComputed:
    """
    Wrap ``computed`` in an LRU cache keyed by its sources' values.

    Args:
        computed: The Computed to wrap.
        cache_size: Number of fingerprints to keep. Defaults to the configured
            ``default_cache_size``.

    Raises:
        ValueError: If ``cache_size`` is less than 1.
    """
    if cache_size is None:
        cache_size = get_config().default_cache_size
    return MemoizedComputed(computed, cache_size=cache_size)
