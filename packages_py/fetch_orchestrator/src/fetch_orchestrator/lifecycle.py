"""
Lifecycle controller: decides when an orchestrator runs on its own and
re-publishes its state to the UI layer.
"""
import asyncio
import logging
from typing import Any, Callable, List, Optional, Set

from fetch_cache import FetchCacheStore
from fetch_key import canonicalize

from .orchestrator import FetchOrchestrator
from .types import (
    FetchFn,
    FetchKey,
    FetchState,
    FetcherOptions,
    FetcherResult,
    FetcherResultListener,
    TransformFn,
)

logger = logging.getLogger(__name__)

LOG_PREFIX = "[fetch_orchestrator.lifecycle]"


class LifecycleController:
    """
    LifecycleController - mount/update glue between an orchestrator and a UI.

    Call activate() once per render/update cycle. The first activation runs
    the orchestrator when options.initial and options.enabled are both true.
    Every later activation whose canonical key differs from the last one seen
    runs it again, whatever enabled and initial say.

    Runs are scheduled as tasks on the running event loop and are never
    cancelled; use settle() to wait for them.

    Example:
        controller = LifecycleController(orchestrator)
        controller.subscribe(render)
        controller.activate()                      # mount
        controller.activate(["posts", {"_page": 2}])  # key changed
        await controller.settle()
    """

    def __init__(self, orchestrator: FetchOrchestrator) -> None:
        self._orchestrator = orchestrator
        self._first_activation = True
        self._last_key: Optional[str] = None
        self._pending: Set[asyncio.Task] = set()
        self._listeners: List[FetcherResultListener] = []
        self._unsubscribe: Optional[Callable[[], None]] = orchestrator.subscribe(
            self._republish
        )

    @property
    def orchestrator(self) -> FetchOrchestrator:
        return self._orchestrator

    @property
    def last_key(self) -> Optional[str]:
        """Canonical key seen at the most recent activation."""
        return self._last_key

    @property
    def pending(self) -> int:
        """Number of scheduled runs that have not finished."""
        return len(self._pending)

    @property
    def result(self) -> FetcherResult:
        """Current state in the shape handed to the UI layer."""
        return self._to_result(self._orchestrator.state)

    def activate(self, fetch_key: Optional[FetchKey] = None) -> Optional[asyncio.Task]:
        """
        Run one update cycle.

        Args:
            fetch_key: New key supplied by the UI, or None to keep the current one

        Returns:
            The scheduled run, or None if nothing was triggered

        Raises:
            SerializationError: If the key cannot be canonicalized
        """
        key = fetch_key if fetch_key is not None else self._orchestrator.fetch_key
        current = canonicalize(key)
        if fetch_key is not None:
            self._orchestrator.set_key(fetch_key)

        options = self._orchestrator.options

        if self._first_activation:
            self._first_activation = False
            self._last_key = current
            if options.initial and options.enabled:
                logger.info(f"{LOG_PREFIX} activate: initial run key={current}")
                return self._schedule()
            logger.debug(f"{LOG_PREFIX} activate: initial run skipped key={current}")
            return None

        if current != self._last_key:
            logger.info(
                f"{LOG_PREFIX} activate: key changed {self._last_key} -> {current}"
            )
            self._last_key = current
            return self._schedule()

        return None

    async def refetch(self, params: Optional[Any] = None) -> None:
        """Re-run with the cache honored."""
        await self._orchestrator.refetch(params)

    async def hard_refetch(self, params: Optional[Any] = None) -> None:
        """Re-run bypassing the cache lookup."""
        await self._orchestrator.hard_refetch(params)

    async def settle(self) -> None:
        """Wait until every scheduled run has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def subscribe(self, listener: FetcherResultListener) -> Callable[[], None]:
        """Receive every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        """Detach from the orchestrator. Pending runs keep going."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    def _schedule(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._orchestrator.run())
        self._pending.add(task)
        task.add_done_callback(self._on_run_done)
        return task

    def _on_run_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"{LOG_PREFIX} scheduled run failed: {error!r}")

    def _to_result(self, state: FetchState) -> FetcherResult:
        return FetcherResult(
            status=state.status,
            loading=state.loading,
            data=state.data,
            error=state.error,
            refetch=self._orchestrator.refetch,
            hard_refetch=self._orchestrator.hard_refetch,
        )

    def _republish(self, state: FetchState) -> None:
        result = self._to_result(state)
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception as error:
                logger.warning(f"{LOG_PREFIX} result listener failed: {error!r}")


def use_fetcher(
    fetch_key: FetchKey,
    fetch_fn: FetchFn,
    transform: Optional[TransformFn] = None,
    options: Optional[FetcherOptions] = None,
    cache_store: Optional[FetchCacheStore] = None,
) -> LifecycleController:
    """
    Build an orchestrator and its controller, and mount it.

    Must be called with a running event loop when the initial run is enabled.
    """
    orchestrator = FetchOrchestrator(fetch_key, fetch_fn, transform, options, cache_store)
    controller = LifecycleController(orchestrator)
    controller.activate()
    return controller
