"""Bounded TTL + LRU cache for rendered markdown"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

import structlog


logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_SIZE = 50
DEFAULT_TTL = 60 * 60.0


@dataclass
class CacheEntry(Generic[T]):
    content:       T
    last_accessed: float
    access_count:  int
    expires_at:    float


class RenderCache(Generic[T]):
    """In-memory memoization of render output keyed by content fingerprint.

    Entries are kept in recency order: a hit or a set moves the key to the
    end, and a set on a full cache evicts the first key, the least recently
    used one. Expiry is checked lazily: an expired entry is dropped by the
    get that finds it.
    Not thread-safe; callers mutate it from a single thread.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        default_ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
        ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.expires_at > self._clock()

    def get(self, key: str) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        now = self._clock()
        if entry.expires_at <= now:
            del self._entries[key]
            logger.debug("cache_expired", key=key)
            return None
        entry.last_accessed = now
        entry.access_count += 1
        self._entries[key] = self._entries.pop(key)
        return entry.content

    def set(self, key: str, content: T, ttl: Optional[float] = None) -> None:
        if key not in self._entries and len(self._entries) >= self.max_size:
            self._evict_lru()
        now = self._clock()
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(
            content=content,
            last_accessed=now,
            access_count=1,
            expires_at=now + (self.default_ttl if ttl is None else ttl),
        )

    def _evict_lru(self) -> None:
        oldest = next(iter(self._entries))
        del self._entries[oldest]
        logger.debug("cache_evicted", key=oldest, size=len(self._entries))

    def clear(self) -> None:
        self._entries.clear()
        logger.debug("cache_cleared")

    def stats(self) -> dict[str, int]:
        return {"size": len(self._entries), "max_size": self.max_size}
