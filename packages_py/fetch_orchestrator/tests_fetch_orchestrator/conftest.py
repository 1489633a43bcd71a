"""Pytest configuration and fixtures for fetch_orchestrator tests."""
from typing import Any, Callable, Generator, List, Optional, Tuple, Type

import pytest

from fetch_cache import MemoryFetchCacheStore, reset_default_cache_store
from fetch_orchestrator import get_settings


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingFetch:
    """Fetch function double that records its calls."""

    def __init__(
        self,
        responder: Optional[Callable[[Any, Any], Any]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.responder = responder or (lambda key, params: {"key": list(key)})
        self.error = error
        self.calls: List[Tuple[Any, Any]] = []

    async def __call__(self, key: Any, params: Any = None) -> Any:
        self.calls.append((key, params))
        if self.error is not None:
            raise self.error
        return self.responder(key, params)

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture(autouse=True)
def isolated_defaults(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from FETCHER_* env vars and the shared store."""
    for name in ("FETCHER_INITIAL", "FETCHER_ENABLED", "FETCHER_ENABLE_CACHE", "FETCHER_TTL_CACHE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    reset_default_cache_store()
    yield
    get_settings.cache_clear()
    reset_default_cache_store()


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryFetchCacheStore:
    """Create a memory store driven by the fake clock."""
    return MemoryFetchCacheStore(clock=clock)


@pytest.fixture
def recording_fetch() -> Type[RecordingFetch]:
    """Expose the RecordingFetch double."""
    return RecordingFetch
