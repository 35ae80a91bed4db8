"""Serialized, paced dispatch of oracle requests."""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_REQUEST_DELAY_SECONDS = 1.0


class RequestQueue:
    """
    FIFO queue that runs one request at a time.

    A single worker thread guarantees ordering and serialization. After each
    request completes (success or failure) the next one is held back until
    ``delay_seconds`` have elapsed. A failing request only fails its own
    future; the queue keeps going.
    """

    def __init__(
        self,
        delay_seconds: float = DEFAULT_REQUEST_DELAY_SECONDS,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._delay = delay_seconds
        self._timeout = timeout_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_finished: Optional[float] = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="oracle-queue")

    @property
    def delay_seconds(self) -> float:
        return self._delay

    def submit(self, fn: Callable[..., T], *args, **kwargs) -> "Future[T]":
        """Enqueue a request; returns its future."""
        return self._executor.submit(self._dispatch, fn, args, kwargs)

    def run(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """
        Enqueue a request and wait for its result.

        Raises whatever the request raised, or concurrent.futures.TimeoutError
        if it did not finish within the queue timeout.
        """
        future = self.submit(fn, *args, **kwargs)
        return future.result(timeout=self._timeout)

    def shutdown(self) -> None:
        """Stop accepting requests; pending ones still run."""
        self._executor.shutdown(wait=False)

    def _dispatch(self, fn: Callable[..., T], args: tuple, kwargs: dict) -> T:
        if self._last_finished is not None:
            wait = self._delay - (self._clock() - self._last_finished)
            if wait > 0:
                logger.debug("Pacing oracle request: waiting %.2fs", wait)
                self._sleep(wait)
        try:
            return fn(*args, **kwargs)
        finally:
            self._last_finished = self._clock()
