from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from .exceptions import UpstreamError

logger = logging.getLogger(__name__)

Supplier = Callable[[], Awaitable[Any]]
Sleeper = Callable[[float], Awaitable[None]]


@dataclass(slots=True)
class RetryPolicy:
    """Capped exponential backoff that defers to an upstream Retry-After hint.

    Attempt n (1-based) that fails transiently is followed by a wait of
    the hint when the upstream sent one, else
    ``min(backoff_base_ms * 2^(n-1), backoff_max_ms)``.
    """

    max_attempts: int = 5
    backoff_base_ms: int = 1000
    backoff_max_ms: int = 8000

    @classmethod
    def from_env(cls) -> "RetryPolicy":
        """Create policy from environment variables."""
        def _int(name: str, default: int) -> int:
            try:
                return int(os.getenv(name, str(default)))
            except ValueError:
                return default

        return cls(
            max_attempts=max(1, _int("MAX_ATTEMPTS", 5)),
            backoff_base_ms=_int("RETRY_BASE_MS", 1000),
            backoff_max_ms=_int("RETRY_MAX_MS", 8000),
        )

    def delay_ms(self, attempt: int, error: Optional[UpstreamError] = None) -> int:
        if error is not None and error.retry_after_ms is not None and error.retry_after_ms >= 0:
            return error.retry_after_ms
        return min(self.backoff_base_ms * 2 ** (attempt - 1), self.backoff_max_ms)

    async def run(
        self,
        supplier: Supplier,
        *,
        sleep: Sleeper = asyncio.sleep,
        context: dict[str, Any] | None = None,
    ) -> Any:
        """Call ``supplier`` until it succeeds, fails terminally, or attempts run out.

        Only ``UpstreamError``s whose ``is_transient`` is true are retried;
        the last error is re-raised unchanged.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await supplier()
            except UpstreamError as e:
                if not e.is_transient or attempt >= self.max_attempts:
                    if e.is_transient:
                        logger.error(
                            f"giving up after {attempt} attempts: {e}",
                            extra={"context": context or {}},
                        )
                    raise
                wait_ms = self.delay_ms(attempt, e)
                logger.warning(
                    f"retry-attempt {attempt}/{self.max_attempts} in {wait_ms}ms: {e}",
                    extra={"context": context or {}},
                )
                await sleep(wait_ms / 1000.0)
        raise RuntimeError("unreachable: max_attempts must be >= 1")
