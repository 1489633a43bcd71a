"""
Memory store implementation for fetch_cache.
"""
import logging
import time
from typing import Dict, Optional, TypeVar

from ..types import CacheEntry, Clock, FetchCacheStore

T = TypeVar("T")

logger = logging.getLogger(__name__)

LOG_PREFIX = "[fetch_cache]"


class MemoryFetchCacheStore(FetchCacheStore):
    """
    In-memory TTL store keyed by canonical fetch key.

    Expired entries are removed lazily when read; entries that are never read
    again stay until purge_expired() or size() is called. The store is not
    size-bounded.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._cache: Dict[str, CacheEntry] = {}
        self._clock = clock or time.time

    def get(self, key: str) -> Optional[CacheEntry]:
        """Get a live entry, dropping it if expired."""
        entry = self._cache.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._cache[key]
            logger.debug(f"{LOG_PREFIX} get: expired key={key}")
            return None

        return entry

    def put(self, key: str, value: T, ttl_seconds: float) -> CacheEntry[T]:
        """Store a value for ttl_seconds, replacing any existing entry."""
        now = self._clock()
        entry = CacheEntry(value=value, cached_at=now, expires_at=now + ttl_seconds)
        self._cache[key] = entry
        logger.debug(f"{LOG_PREFIX} put: key={key} ttl={ttl_seconds}s")
        return entry

    def has(self, key: str) -> bool:
        """Check if a live entry exists."""
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        """Delete an entry."""
        if key in self._cache:
            del self._cache[key]
            return True
        return False

    def clear(self) -> None:
        """Remove all entries."""
        self._cache.clear()

    def size(self) -> int:
        """Get the number of live entries."""
        self.purge_expired()
        return len(self._cache)

    def purge_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self._clock()
        expired_keys = [
            key for key, entry in self._cache.items() if entry.is_expired(now)
        ]
        for key in expired_keys:
            del self._cache[key]
        if expired_keys:
            logger.debug(f"{LOG_PREFIX} purge_expired: removed {len(expired_keys)}")
        return len(expired_keys)


def create_memory_fetch_cache_store(clock: Optional[Clock] = None) -> MemoryFetchCacheStore:
    """Create a memory fetch cache store."""
    return MemoryFetchCacheStore(clock)
