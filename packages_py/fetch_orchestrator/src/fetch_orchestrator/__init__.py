"""
Client-side fetch orchestration: cache-or-fetch decisions, a reducer-driven
loading/success/error state machine, and automatic re-runs on key change.
"""
from fetch_key import SerializationError

from .types import (
    FetchKey,
    FetchFn,
    TransformFn,
    FetchStatus,
    FetchState,
    FetcherActionType,
    FetcherAction,
    FetcherOptions,
    FetcherResult,
    FetcherEventType,
    FetcherEvent,
    FetcherEventListener,
    FetchStateListener,
    FetcherResultListener,
)
from .reducer import fetcher_reducer
from .config import (
    DEFAULT_FETCHER_OPTIONS,
    FetcherSettings,
    get_settings,
    get_default_fetcher_options,
    merge_fetcher_options,
)
from .orchestrator import FetchOrchestrator, create_fetch_orchestrator
from .lifecycle import LifecycleController, use_fetcher
from .adapters import create_httpx_fetch_fn, json_body


__all__ = [
    # Types
    "FetchKey",
    "FetchFn",
    "TransformFn",
    "FetchStatus",
    "FetchState",
    "FetcherActionType",
    "FetcherAction",
    "FetcherOptions",
    "FetcherResult",
    "FetcherEventType",
    "FetcherEvent",
    "FetcherEventListener",
    "FetchStateListener",
    "FetcherResultListener",
    "SerializationError",
    # Reducer
    "fetcher_reducer",
    # Config
    "DEFAULT_FETCHER_OPTIONS",
    "FetcherSettings",
    "get_settings",
    "get_default_fetcher_options",
    "merge_fetcher_options",
    # Orchestration
    "FetchOrchestrator",
    "create_fetch_orchestrator",
    "LifecycleController",
    "use_fetcher",
    # Adapters
    "create_httpx_fetch_fn",
    "json_body",
]

__version__ = "1.0.0"
