"""In-memory TTL cache for expensive or rate-limited fetches."""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """Cached value and the clock reading at which it stops being served."""

    expires_at: float
    value: T

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class ResultCache:
    """
    Key → (expiry, value) memoization.

    Keys are built by callers and encode the logical identity of the
    computation (e.g. ``m:<account>:<days>:<game_mode>:<lobby_type>``).

    There is no request coalescing: two callers that miss the same key
    at the same time both run the producer, and the later store wins.
    The entry map itself is only touched under ``_lock``; the lock is
    never held while a producer runs.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, CacheEntry[Any]] = {}
        self._lock = threading.Lock()

    async def get_or_compute(
        self,
        key: str,
        ttl: float,
        producer: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for ``key`` or compute, store and return it.

        A producer exception propagates and leaves the cache untouched.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_fresh(self._clock()):
                logger.debug(f"Cache hit for {key}")
                return entry.value

        logger.debug(f"Cache {'expired' if entry else 'miss'} for {key}")
        value = await producer()
        with self._lock:
            self._entries[key] = CacheEntry(expires_at=self._clock() + ttl, value=value)
        return value

    def entry_info(self, key: str) -> Optional[dict]:
        """Get metadata about a cache entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            return {
                "expires_in_seconds": round(entry.expires_at - now, 3),
                "is_fresh": entry.is_fresh(now),
            }

    def invalidate(self, key: Optional[str] = None) -> None:
        """Invalidate one key, or everything when ``key`` is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
                logger.info("Cache cleared")
            elif self._entries.pop(key, None) is not None:
                logger.info(f"Cache invalidated for {key}")

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
