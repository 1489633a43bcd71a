"""
Tests for fetch cache stores.

Coverage includes:
- get()/put() round trip with reference identity
- Boundary testing: expiry exactly at expires_at and just after
- Lazy expiry on read, purge of unread entries
- Overwrite semantics
- Shared process-wide instance lifecycle
"""
import time

import pytest

from fetch_cache import (
    CacheEntry,
    MemoryFetchCacheStore,
    create_memory_fetch_cache_store,
    get_default_cache_store,
    reset_default_cache_store,
)


class TestMemoryFetchCacheStore:
    """Tests for MemoryFetchCacheStore."""

    # === get()/put() tests ===

    def test_get_returns_none_for_missing_key(self, store: MemoryFetchCacheStore) -> None:
        """Should return None for a key never stored."""
        assert store.get("missing") is None

    def test_get_after_put_returns_same_object(self, store: MemoryFetchCacheStore) -> None:
        """Should return the stored value without copying."""
        value = {"id": 1, "items": [1, 2, 3]}
        store.put("key", value, 10)

        entry = store.get("key")
        assert entry is not None
        assert entry.value is value

    def test_put_records_timestamps(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should set cached_at to now and expires_at to now + ttl."""
        entry = store.put("key", "value", 10)

        assert entry.cached_at == clock.now
        assert entry.expires_at == clock.now + 10

    def test_none_value_is_distinguishable_from_missing(
        self, store: MemoryFetchCacheStore
    ) -> None:
        """Should return an entry wrapping None."""
        store.put("key", None, 10)

        entry = store.get("key")
        assert entry is not None
        assert entry.value is None

    def test_put_overwrites_existing_entry(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should replace the value and expiry unconditionally."""
        store.put("key", "old", 100)
        clock.advance(5)
        store.put("key", "new", 1)

        entry = store.get("key")
        assert entry is not None
        assert entry.value == "new"
        assert entry.expires_at == clock.now + 1

    # === Expiry tests ===

    def test_entry_is_live_at_expiry_instant(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should still serve the entry when now == expires_at."""
        store.put("key", "value", 10)
        clock.advance(10)

        assert store.get("key") is not None

    def test_entry_expires_after_ttl(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should return None once now > expires_at."""
        store.put("key", "value", 10)
        clock.advance(10.001)

        assert store.get("key") is None

    def test_expired_read_deletes_entry(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should drop the entry when an expired read happens."""
        store.put("key", "value", 1)
        clock.advance(2)

        store.get("key")
        assert store.delete("key") is False

    def test_zero_ttl_is_readable_immediately(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should serve a zero-ttl entry until time moves."""
        store.put("key", "value", 0)
        assert store.get("key") is not None

        clock.advance(0.001)
        assert store.get("key") is None

    def test_with_real_clock(self) -> None:
        """Should default to time.time."""
        store = MemoryFetchCacheStore()
        entry = store.put("key", "value", 60)

        assert entry.cached_at <= time.time()
        assert store.get("key") is entry

    # === has()/delete()/clear()/size() tests ===

    def test_has(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should reflect liveness."""
        assert store.has("key") is False
        store.put("key", "value", 1)
        assert store.has("key") is True
        clock.advance(2)
        assert store.has("key") is False

    def test_delete(self, store: MemoryFetchCacheStore) -> None:
        """Should delete and report whether something was removed."""
        store.put("key", "value", 10)

        assert store.delete("key") is True
        assert store.delete("key") is False
        assert store.get("key") is None

    def test_clear(self, store: MemoryFetchCacheStore) -> None:
        """Should remove every entry."""
        store.put("a", 1, 10)
        store.put("b", 2, 10)
        store.clear()

        assert store.size() == 0

    def test_size_excludes_expired(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should count live entries only."""
        store.put("short", 1, 1)
        store.put("long", 2, 100)
        clock.advance(5)

        assert store.size() == 1

    def test_purge_expired(self, store: MemoryFetchCacheStore, clock) -> None:
        """Should remove unread expired entries and report the count."""
        store.put("a", 1, 1)
        store.put("b", 2, 1)
        store.put("c", 3, 100)
        clock.advance(5)

        assert store.purge_expired() == 2
        assert store.purge_expired() == 0
        assert store.get("c") is not None


class TestCacheEntry:
    """Tests for CacheEntry."""

    @pytest.mark.parametrize(
        "now,expired",
        [(9.0, False), (10.0, False), (10.5, True)],
    )
    def test_is_expired(self, now: float, expired: bool) -> None:
        entry = CacheEntry(value="v", cached_at=0.0, expires_at=10.0)
        assert entry.is_expired(now) is expired


class TestFactories:
    """Tests for store factories and the shared instance."""

    def test_create_memory_fetch_cache_store(self, clock) -> None:
        store = create_memory_fetch_cache_store(clock)
        assert isinstance(store, MemoryFetchCacheStore)
        assert store.put("k", 1, 1).cached_at == clock.now

    def test_default_store_is_shared(self, fresh_default_store) -> None:
        """Should return the same instance on every call."""
        assert get_default_cache_store() is get_default_cache_store()

    def test_default_store_keeps_entries_across_calls(self, fresh_default_store) -> None:
        get_default_cache_store().put("shared", "value", 60)
        entry = get_default_cache_store().get("shared")

        assert entry is not None
        assert entry.value == "value"

    def test_reset_creates_new_instance(self, fresh_default_store) -> None:
        first = get_default_cache_store()
        reset_default_cache_store()

        assert get_default_cache_store() is not first
