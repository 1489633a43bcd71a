"""
Process-wide default cache store.

The default store is created on first use and lives for the rest of the
process. Every orchestrator that is not given an explicit store shares it.
Entries expire individually; the store itself is never torn down.
"""
from functools import lru_cache

from .stores.memory import MemoryFetchCacheStore


@lru_cache()
def get_default_cache_store() -> MemoryFetchCacheStore:
    """Get the shared process-wide cache store."""
    return MemoryFetchCacheStore()


def reset_default_cache_store() -> None:
    """Discard the shared store so the next call creates a fresh one."""
    get_default_cache_store.cache_clear()
