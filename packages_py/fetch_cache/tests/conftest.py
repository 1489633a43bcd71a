"""Pytest configuration and fixtures for fetch_cache tests."""
from typing import Generator

import pytest

from fetch_cache import MemoryFetchCacheStore, reset_default_cache_store


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock starting at t=1000."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryFetchCacheStore:
    """Create a memory store driven by the fake clock."""
    return MemoryFetchCacheStore(clock=clock)


@pytest.fixture
def fresh_default_store() -> Generator[None, None, None]:
    """Reset the process-wide store around a test."""
    reset_default_cache_store()
    yield
    reset_default_cache_store()
