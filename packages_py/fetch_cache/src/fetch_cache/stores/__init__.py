"""
Store implementations for fetch_cache.
"""
from .memory import (
    MemoryFetchCacheStore,
    create_memory_fetch_cache_store,
)

__all__ = [
    "MemoryFetchCacheStore",
    "create_memory_fetch_cache_store",
]
