"""In-flight request accounting so shutdown can wait for uploads to finish."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.lamyda.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts requests in progress and signals when they have drained."""

    def __init__(self) -> None:
        self._in_flight = 0
        self._draining = False
        self._lock = asyncio.Lock()
        self._drained = asyncio.Event()

    @property
    def is_draining(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        async with self._lock:
            self._in_flight += 1
        try:
            yield
        finally:
            async with self._lock:
                self._in_flight -= 1
                if self._in_flight == 0 and self._draining:
                    self._drained.set()

    async def start_draining(self) -> None:
        """Stop waiting on new requests; set the drain event once idle."""
        self._draining = True
        async with self._lock:
            if self._in_flight == 0:
                self._drained.set()
        logger.info("Draining requests", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds. Returns False on timeout."""
        try:
            await asyncio.wait_for(self._drained.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning("Drain timed out", timeout=timeout, in_flight=self._in_flight)
            return False
        return True

    def reset(self) -> None:
        """Reset state. For testing only."""
        self._in_flight = 0
        self._draining = False
        self._drained = asyncio.Event()


request_tracker = RequestTracker()
