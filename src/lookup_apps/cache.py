"""In-memory caching with per-entry expiry."""

import abc
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Generic, TypeVar


K = TypeVar("K")
V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    """A single cache entry with its expiry."""

    value: V
    created_at: float = field(default_factory=time.time)
    ttl_seconds: float | None = None

    @property
    def is_expired(self) -> bool:
        """Check if the entry has expired."""
        if self.ttl_seconds is None:
            return False
        return time.time() - self.created_at > self.ttl_seconds


class CacheBackend(abc.ABC, Generic[K, V]):
    """Abstract base class for cache backends."""

    @abc.abstractmethod
    def get(self, key: K) -> V | None:
        """Get a value from the cache."""
        ...

    @abc.abstractmethod
    def set(self, key: K, value: V, ttl: float | None = None) -> None:
        """Set a value in the cache."""
        ...

    @abc.abstractmethod
    def delete(self, key: K) -> bool:
        """Delete a value from the cache."""
        ...

    @abc.abstractmethod
    def clear(self) -> int:
        """Clear all values from the cache."""
        ...


class MemoryCache(CacheBackend[K, V]):
    """In-memory cache with LRU eviction."""

    def __init__(self, max_size: int = 16, default_ttl: float | None = None):
        self._data: OrderedDict[K, CacheEntry[V]] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._lock = threading.RLock()

    def get(self, key: K) -> V | None:
        """Get a value from the cache."""
        with self._lock:
            entry = self._data.get(key)

            if entry is None:
                return None

            if entry.is_expired:
                del self._data[key]
                return None

            self._data.move_to_end(key)
            return entry.value

    def set(self, key: K, value: V, ttl: float | None = None) -> None:
        """Set a value in the cache."""
        with self._lock:
            self._data.pop(key, None)
            while len(self._data) >= self._max_size:
                self._data.popitem(last=False)

            self._data[key] = CacheEntry(
                value=value,
                ttl_seconds=ttl if ttl is not None else self._default_ttl,
            )

    def delete(self, key: K) -> bool:
        """Delete a value from the cache."""
        with self._lock:
            if key in self._data:
                del self._data[key]
                return True
            return False

    def clear(self) -> int:
        """Clear all values from the cache."""
        with self._lock:
            count = len(self._data)
            self._data.clear()
            return count

    def size(self) -> int:
        """Get the number of items in the cache."""
        return len(self._data)

