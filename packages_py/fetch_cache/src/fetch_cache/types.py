"""
Types for fetch_cache package.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Clock = Callable[[], float]
"""Returns the current time as a Unix timestamp in seconds."""


@dataclass
class CacheEntry(Generic[T]):
    """Cached value with its expiry."""

    value: T
    """The cached value, stored by reference."""

    cached_at: float
    """When the value was cached (Unix timestamp)."""

    expires_at: float
    """When the entry expires (Unix timestamp)."""

    def is_expired(self, now: float) -> bool:
        """An entry is live up to and including its expiry instant."""
        return now > self.expires_at


class FetchCacheStore(ABC):
    """
    Fetch cache store interface.

    Methods are synchronous so that a cache check and the write that follows
    it never straddle a suspension point.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[CacheEntry]:
        """Get a live entry, dropping it if expired."""
        pass

    @abstractmethod
    def put(self, key: str, value: T, ttl_seconds: float) -> CacheEntry[T]:
        """Store a value for ttl_seconds, replacing any existing entry."""
        pass

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check if a live entry exists."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete an entry."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Get the number of live entries."""
        pass

    @abstractmethod
    def purge_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        pass
