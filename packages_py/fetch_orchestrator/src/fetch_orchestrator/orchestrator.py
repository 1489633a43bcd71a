"""
Fetch orchestrator: cache-or-fetch decision plus the loading/success/error
state machine for one mounted consumer.
"""
import inspect
import logging
import time
from typing import Any, Callable, Generic, List, Optional, Set, TypeVar

from fetch_cache import FetchCacheStore, get_default_cache_store
from fetch_key import canonicalize

from .config import merge_fetcher_options
from .reducer import fetcher_reducer, reject, resolve, settle, start
from .types import (
    FetchFn,
    FetchKey,
    FetchState,
    FetchStateListener,
    FetcherAction,
    FetcherEvent,
    FetcherEventListener,
    FetcherEventType,
    FetcherOptions,
    TransformFn,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

LOG_PREFIX = "[fetch_orchestrator]"


class FetchOrchestrator(Generic[T]):
    """
    FetchOrchestrator - serves a fetch key from the cache or the network.

    Every run() publishes loading=True, then exactly one terminal state:
    new data or a new error, with loading=False. All transitions go through
    fetcher_reducer, applied one at a time on the event loop thread.

    Overlapping runs are not cancelled. If run() is called again while an
    earlier fetch is pending, whichever fetch resolves last publishes last,
    even when it belongs to an older key.

    Example:
        async def fetch_posts(key, params=None):
            return await client.get("/posts", params=key[1])

        orchestrator = FetchOrchestrator(
            ["posts", {"_page": 1}],
            fetch_posts,
            transform=lambda response: response.json(),
        )
        await orchestrator.run()
        print(orchestrator.state.data)
    """

    def __init__(
        self,
        fetch_key: FetchKey,
        fetch_fn: FetchFn,
        transform: Optional[TransformFn] = None,
        options: Optional[FetcherOptions] = None,
        cache_store: Optional[FetchCacheStore] = None,
    ) -> None:
        self._fetch_key = fetch_key
        self._fetch_fn = fetch_fn
        self._transform = transform
        self._options = merge_fetcher_options(options)
        self._store = cache_store if cache_store is not None else get_default_cache_store()
        self._state: FetchState[T] = FetchState(data=self._options.initial_data)
        self._state_listeners: List[FetchStateListener] = []
        self._listeners: Set[FetcherEventListener] = set()

    @property
    def state(self) -> FetchState[T]:
        return self._state

    @property
    def fetch_key(self) -> FetchKey:
        return self._fetch_key

    @property
    def options(self) -> FetcherOptions:
        return self._options

    @property
    def cache_store(self) -> FetchCacheStore:
        return self._store

    def set_key(self, fetch_key: FetchKey) -> None:
        """Replace the fetch key used by subsequent runs."""
        self._fetch_key = fetch_key

    def dispatch(self, action: FetcherAction) -> FetchState[T]:
        """Apply an action and publish the new state if it changed."""
        previous = self._state
        self._state = fetcher_reducer(previous, action)
        if self._state is not previous:
            self._publish(self._state)
        return self._state

    async def run(self, params: Optional[Any] = None, hard: bool = False) -> None:
        """
        Serve the current key from the cache or fetch it.

        Args:
            params: Passed through to the fetch function
            hard: Skip the cache lookup (the result is still cached)

        Raises:
            SerializationError: If the current key cannot be canonicalized.
                Fetch and transform failures are never raised; they are
                published as state.error.
        """
        fetch_key = self._fetch_key
        self.dispatch(start())
        try:
            cache_key = canonicalize(fetch_key)

            if self._options.enable_cache and not hard:
                entry = self._store.get(cache_key)
                if entry is not None:
                    logger.debug(f"{LOG_PREFIX} run: cache hit key={cache_key}")
                    self._emit(FetcherEventType.CACHE_HIT, cache_key)
                    self.dispatch(resolve(entry.value))
                    return
                logger.debug(f"{LOG_PREFIX} run: cache miss key={cache_key}")
                self._emit(FetcherEventType.CACHE_MISS, cache_key)

            started_at = time.monotonic()
            self._emit(FetcherEventType.FETCH_START, cache_key, {"hard": hard})

            try:
                response = await self._fetch_fn(fetch_key, params)
                result = self._transform(response) if self._transform else response
                if inspect.isawaitable(result):
                    result = await result
            except Exception as error:
                logger.debug(f"{LOG_PREFIX} run: fetch failed key={cache_key}: {error!r}")
                self._emit(
                    FetcherEventType.FETCH_ERROR,
                    cache_key,
                    {"error": str(error), "duration_seconds": time.monotonic() - started_at},
                )
                self.dispatch(reject(error))
                return

            self._emit(
                FetcherEventType.FETCH_SUCCESS,
                cache_key,
                {"duration_seconds": time.monotonic() - started_at},
            )
            self.dispatch(resolve(result))

            if self._options.enable_cache:
                entry = self._store.put(cache_key, result, self._options.ttl_cache)
                self._emit(
                    FetcherEventType.CACHE_STORE,
                    cache_key,
                    {"expires_at": entry.expires_at},
                )
        finally:
            self.dispatch(settle())

    async def refetch(self, params: Optional[Any] = None) -> None:
        """Re-run with the cache honored."""
        await self.run(params, hard=False)

    async def hard_refetch(self, params: Optional[Any] = None) -> None:
        """Re-run bypassing the cache lookup."""
        await self.run(params, hard=True)

    def subscribe(self, listener: FetchStateListener) -> Callable[[], None]:
        """Receive every published state. Returns an unsubscribe function."""
        self._state_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

        return unsubscribe

    def on(self, listener: FetcherEventListener) -> Callable[[], None]:
        """Add event listener."""
        self._listeners.add(listener)
        return lambda: self._listeners.discard(listener)

    def off(self, listener: FetcherEventListener) -> None:
        """Remove event listener."""
        self._listeners.discard(listener)

    def _publish(self, state: FetchState[T]) -> None:
        for listener in list(self._state_listeners):
            try:
                listener(state)
            except Exception as error:
                logger.warning(f"{LOG_PREFIX} state listener failed: {error!r}")

    def _emit(
        self,
        event_type: FetcherEventType,
        key: str,
        metadata: Optional[dict] = None,
    ) -> None:
        """Emit an event to all listeners."""
        event = FetcherEvent(
            type=event_type, key=key, timestamp=time.time(), metadata=metadata
        )
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as error:
                logger.warning(f"{LOG_PREFIX} event listener failed: {error!r}")

    def close(self) -> None:
        """Drop all listeners."""
        self._state_listeners.clear()
        self._listeners.clear()


def create_fetch_orchestrator(
    fetch_key: FetchKey,
    fetch_fn: FetchFn,
    transform: Optional[TransformFn] = None,
    options: Optional[FetcherOptions] = None,
    cache_store: Optional[FetchCacheStore] = None,
) -> FetchOrchestrator:
    """Create a fetch orchestrator."""
    return FetchOrchestrator(fetch_key, fetch_fn, transform, options, cache_store)
