"""Thread-safe LRU cache for compiled dictionaries.

Compilation is referentially transparent for a given dictionary content, so
compiled results are cached under a hashable snapshot of that content.
Dictionaries must be treated as immutable once compiled; the snapshot is
taken on every lookup, so a mutated dictionary simply misses the cache.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - LRU eviction via OrderedDict
    - Content-addressed keys (nested tuples with type markers)
    - Caller-controlled invalidation via clear()

Python 3.13+.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Hashable, Mapping
from threading import RLock
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .dictionary import CompiledDictionary

__all__ = ["DictionaryCache"]

# Markers keep mappings and sequences apart in snapshots: {"a": "b"} and
# [["a", "b"]] must not share a key.
_MAPPING = object()
_SEQUENCE = object()


class DictionaryCache:
    """Thread-safe LRU cache of compiled dictionaries.

    Attributes:
        maxsize: Maximum number of cache entries
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses (for metrics)
    """

    __slots__ = ("_cache", "_hits", "_lock", "_maxsize", "_misses", "_unhashable_skips")

    def __init__(self, maxsize: int) -> None:
        """Initialize dictionary cache.

        Args:
            maxsize: Maximum number of entries
        """
        if maxsize <= 0:
            msg = "maxsize must be positive"
            raise ValueError(msg)

        self._cache: OrderedDict[Hashable, CompiledDictionary] = OrderedDict()
        self._maxsize = maxsize
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._unhashable_skips = 0

    def get(self, key: Hashable | None) -> CompiledDictionary | None:
        """Get a cached compiled dictionary, or None on a miss."""
        with self._lock:
            if key is None:
                self._unhashable_skips += 1
                self._misses += 1
                return None
            if key in self._cache:
                self._cache.move_to_end(key)
                self._hits += 1
                return self._cache[key]
            self._misses += 1
            return None

    def put(self, key: Hashable | None, compiled: CompiledDictionary) -> None:
        """Store a compiled dictionary, evicting the LRU entry when full."""
        if key is None:
            return
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            elif len(self._cache) >= self._maxsize:
                self._cache.popitem(last=False)
            self._cache[key] = compiled

    def clear(self) -> None:
        """Clear all cached entries and reset metrics."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0
            self._unhashable_skips = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Returns:
            Dict with keys size, maxsize, hits, misses, hit_rate (percentage)
            and unhashable_skips
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "unhashable_skips": self._unhashable_skips,
            }

    @staticmethod
    def make_key(dictionary: object) -> Hashable | None:
        """Build a content snapshot of a dictionary for use as a cache key.

        Returns None when the content cannot be snapshotted (unhashable
        leaves, unsortable keys, excessive nesting); such dictionaries are
        compiled without caching.
        """
        try:
            key = DictionaryCache._snapshot(dictionary)
            hash(key)
        except (TypeError, RecursionError):
            return None
        return key

    @staticmethod
    def _snapshot(value: object) -> Hashable:
        match value:
            case Mapping():
                items = sorted(
                    (k, DictionaryCache._snapshot(v)) for k, v in value.items()
                )
                return (_MAPPING, tuple(items))
            case list() | tuple():
                return (_SEQUENCE, tuple(DictionaryCache._snapshot(v) for v in value))
            case _:
                return value  # type: ignore[return-value]

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Maximum cache size."""
        return self._maxsize

    @property
    def hits(self) -> int:
        """Number of cache hits."""
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses."""
        with self._lock:
            return self._misses
