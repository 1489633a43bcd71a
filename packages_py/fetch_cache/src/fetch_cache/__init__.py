"""
Time-bounded cache store for fetched values.
"""
from .types import (
    CacheEntry,
    Clock,
    FetchCacheStore,
)
from .stores import (
    MemoryFetchCacheStore,
    create_memory_fetch_cache_store,
)
from .store import (
    get_default_cache_store,
    reset_default_cache_store,
)


__all__ = [
    # Types
    "CacheEntry",
    "Clock",
    "FetchCacheStore",
    # Stores
    "MemoryFetchCacheStore",
    "create_memory_fetch_cache_store",
    # Shared instance
    "get_default_cache_store",
    "reset_default_cache_store",
]

__version__ = "1.0.0"
