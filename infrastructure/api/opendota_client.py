"""OpenDota API client."""
import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, Union

import httpx

from config import settings
from domain.entities import PROJECTED_FIELDS
from .exceptions import UpstreamError, UpstreamParseError
from .rate_limiter import MinIntervalRateLimiter
from .retry_policy import RetryPolicy

logger = logging.getLogger(__name__)

Params = Union[Dict[str, Any], Sequence[Tuple[str, Any]], None]


def parse_retry_after_ms(value: Optional[str]) -> Optional[int]:
    """Retry-After header (seconds) in milliseconds; None if absent or unparsable."""
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return int(seconds * 1000)


class OpenDotaClient:
    """Asynchronous OpenDota client.

    Every attempt of every call waits on the shared ``rate_limiter`` first,
    then transient failures (429, 5xx, no response) are retried by
    ``retry_policy``. Anything else is raised as ``UpstreamError`` at once.
    """

    def __init__(
        self,
        rate_limiter: MinIntervalRateLimiter,
        *,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_url = (base_url or settings.OPENDOTA_BASE_URL).rstrip("/")
        self.api_key = settings.OPENDOTA_API_KEY if api_key is None else api_key
        self.rate_limiter = rate_limiter
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=settings.MAX_ATTEMPTS,
            backoff_base_ms=settings.RETRY_BASE_MS,
            backoff_max_ms=settings.RETRY_MAX_MS,
        )
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self._transport = transport
        self._sleep = sleep
        self.session: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._ensure_session()
        return self

    async def __aexit__(self, *_):
        await self.close()

    def _ensure_session(self) -> httpx.AsyncClient:
        if self.session is None or self.session.is_closed:
            self.session = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self.session

    async def close(self) -> None:
        if self.session and not self.session.is_closed:
            await self.session.aclose()
        self.session = None

    def _with_key(self, params: Params) -> List[Tuple[str, Any]]:
        if params is None:
            pairs: List[Tuple[str, Any]] = []
        elif isinstance(params, dict):
            pairs = list(params.items())
        else:
            pairs = list(params)
        if self.api_key:
            pairs.append(("api_key", self.api_key))
        return pairs

    async def _attempt(self, method: str, endpoint: str, params: List[Tuple[str, Any]]) -> Any:
        await self.rate_limiter.acquire()
        session = self._ensure_session()
        try:
            response = await session.request(method, endpoint, params=params)
        except httpx.TransportError as exc:
            raise UpstreamError(f"No response for {method} {endpoint}: {exc!r}") from exc

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except json.JSONDecodeError as exc:
                raise UpstreamParseError(f"Invalid JSON from {endpoint}") from exc

        # 503s may carry Retry-After too; the policy only looks at it for retryable statuses.
        raise UpstreamError(
            f"HTTP {response.status_code} for {method} {endpoint}",
            status_code=response.status_code,
            retry_after_ms=parse_retry_after_ms(response.headers.get("Retry-After")),
        )

    async def fetch(self, endpoint: str, params: Params = None, *, method: str = "GET") -> Any:
        """Call ``endpoint`` (relative to the base URL) and return the decoded JSON body."""
        pairs = self._with_key(params)
        logger.debug(f"{method} {endpoint}")
        return await self.retry_policy.run(
            lambda: self._attempt(method, endpoint, pairs),
            sleep=self._sleep,
            context={"endpoint": endpoint, "method": method},
        )

    # ── Heroes ─────────────────────────────────────────────────────────

    async def get_heroes(self) -> List[Dict[str, Any]]:
        data = await self.fetch("/heroes")
        return data if isinstance(data, list) else []

    # ── Players ────────────────────────────────────────────────────────

    async def get_player_matches(
        self,
        account_id: int,
        *,
        limit: int = 5000,
        days: Optional[int] = None,
        game_mode: Optional[int] = None,
        lobby_type: Optional[int] = None,
        project: Sequence[str] = PROJECTED_FIELDS,
    ) -> List[Dict[str, Any]]:
        params: List[Tuple[str, Any]] = [("limit", limit), ("significant", 0)]
        if days is not None:
            params.append(("date", days))
        if game_mode is not None:
            params.append(("game_mode", game_mode))
        if lobby_type is not None:
            params.append(("lobby_type", lobby_type))
        params.extend(("project", col) for col in project)
        data = await self.fetch(f"/players/{account_id}/matches", params)
        return data if isinstance(data, list) else []

    # ── Matches ────────────────────────────────────────────────────────

    async def get_match(self, match_id: int) -> Dict[str, Any]:
        data = await self.fetch(f"/matches/{match_id}")
        return data if isinstance(data, dict) else {}

    async def request_parse(self, match_id: int) -> Any:
        return await self.fetch(f"/request/{match_id}", method="POST")
