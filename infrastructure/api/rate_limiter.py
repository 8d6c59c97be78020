"""Process-wide rate limiter for the upstream match-data service."""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]


class MinIntervalRateLimiter:
    """
    Enforces a minimum gap between the starts of consecutive requests.

    One instance is shared by every caller in the process. ``acquire``
    holds the lock while it waits, so callers are released one at a time
    in arrival order and the "last request" timestamp is only ever
    touched under the lock.
    """

    def __init__(
        self,
        min_interval_s: float = 1.0,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ):
        if min_interval_s < 0:
            raise ValueError("min_interval_s must be >= 0")
        self.min_interval_s = min_interval_s
        self._clock = clock
        self._sleep = sleep
        self._last_request: Optional[float] = None
        self._granted = 0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            if self._last_request is not None:
                wait = self._last_request + self.min_interval_s - self._clock()
                if wait > 0:
                    logger.debug(f"Rate limit: waiting {wait:.2f}s")
                    await self._sleep(wait)
            self._last_request = self._clock()
            self._granted += 1

    def get_status(self) -> tuple[int, Optional[float]]:
        """Slots granted so far and seconds since the last one (None if none yet)."""
        if self._last_request is None:
            return self._granted, None
        return self._granted, self._clock() - self._last_request

    async def reset(self) -> None:
        async with self._lock:
            self._last_request = None
