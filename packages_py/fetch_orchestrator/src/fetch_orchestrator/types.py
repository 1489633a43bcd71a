"""
Types for fetch_orchestrator package.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from fetch_key import FetchKey

T = TypeVar("T")

FetchFn = Callable[[FetchKey, Any], Awaitable[Any]]
"""Fetch collaborator: called with the current key and optional params."""

TransformFn = Callable[[Any], Any]
"""Maps the raw fetch result to the published data. May return an awaitable."""


class FetchStatus(str, Enum):
    """Lifecycle status of an orchestrator instance."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class FetchState(Generic[T]):
    """
    Snapshot of an orchestrator's state.

    data and error both survive later transitions: a failed run keeps the
    previous data, and a new run does not clear the previous error.
    """

    status: FetchStatus = FetchStatus.IDLE
    loading: bool = False
    data: Optional[T] = None
    error: Optional[Any] = None


class FetcherActionType(str, Enum):
    """Action variants understood by the fetcher reducer."""

    START = "fetcher:start"
    RESOLVE = "fetcher:resolve"
    REJECT = "fetcher:reject"
    SETTLE = "fetcher:settle"


@dataclass(frozen=True)
class FetcherAction:
    """A state transition request."""

    type: FetcherActionType
    payload: Any = None


@dataclass
class FetcherOptions:
    """Per-instance fetcher configuration. None means use the default."""

    initial: Optional[bool] = None
    """Run automatically on first activation."""

    enabled: Optional[bool] = None
    """Gate for the first automatic run only."""

    enable_cache: Optional[bool] = None
    """Read from and write to the cache store."""

    ttl_cache: Optional[float] = None
    """Seconds a fetched value stays in the cache."""

    initial_data: Optional[Any] = None
    """Data published before the first successful run."""


@dataclass(frozen=True)
class FetcherResult(Generic[T]):
    """State handed to the UI layer, with the manual re-run operations."""

    status: FetchStatus
    loading: bool
    data: Optional[T]
    error: Optional[Any]
    refetch: Callable[..., Awaitable[None]]
    hard_refetch: Callable[..., Awaitable[None]]


class FetcherEventType(str, Enum):
    """Event types for fetcher operations."""

    CACHE_HIT = "cache:hit"
    CACHE_MISS = "cache:miss"
    CACHE_STORE = "cache:store"
    FETCH_START = "fetch:start"
    FETCH_SUCCESS = "fetch:success"
    FETCH_ERROR = "fetch:error"


@dataclass
class FetcherEvent:
    """Fetcher event."""

    type: FetcherEventType
    key: str
    timestamp: float
    metadata: Optional[Dict[str, Any]] = None


FetcherEventListener = Callable[[FetcherEvent], None]
"""Event listener type."""

FetchStateListener = Callable[[FetchState], None]
"""Receives every published state."""

FetcherResultListener = Callable[[FetcherResult], None]
"""Receives every state re-published by a lifecycle controller."""
