"""Match repository implementation."""
import logging
from typing import Any, Dict, List, Optional

from config import settings
from domain.entities import MatchRecord
from domain.enums import QueueFilters
from domain.interfaces import IMatchRepository
from infrastructure.api import OpenDotaClient
from infrastructure.cache import ResultCache

logger = logging.getLogger(__name__)

HEROES_CACHE_KEY = "heroes:v1"


class MatchRepository(IMatchRepository):
    """Repository for match data using the OpenDota API."""

    def __init__(
        self,
        api_client: OpenDotaClient,
        cache: ResultCache,
        *,
        match_list_limit: Optional[int] = None,
        heroes_ttl: Optional[float] = None,
        matches_ttl: Optional[float] = None,
    ):
        """
        Initialize match repository.

        Args:
            api_client: OpenDota client instance (owns the shared rate limiter)
            cache: Result cache shared by every report computation
            match_list_limit: Max rows requested from the match list endpoint
            heroes_ttl: Seconds the hero table stays cached
            matches_ttl: Seconds a player's match list stays cached
        """
        self.api_client = api_client
        self.cache = cache
        self.match_list_limit = match_list_limit or settings.MATCH_LIST_LIMIT
        self.heroes_ttl = settings.HEROES_CACHE_TTL if heroes_ttl is None else heroes_ttl
        self.matches_ttl = settings.MATCHES_CACHE_TTL if matches_ttl is None else matches_ttl

    async def get_hero_names(self) -> Dict[int, str]:
        """Get hero id -> localized name, cached for ``heroes_ttl``."""
        return await self.cache.get_or_compute(
            HEROES_CACHE_KEY, self.heroes_ttl, self._fetch_hero_names
        )

    async def _fetch_hero_names(self) -> Dict[int, str]:
        heroes = await self.api_client.get_heroes()
        names: Dict[int, str] = {}
        for hero in heroes:
            if not isinstance(hero, dict) or hero.get("id") is None:
                continue
            try:
                hero_id = int(hero["id"])
            except (TypeError, ValueError):
                continue
            names[hero_id] = str(hero.get("localized_name") or hero.get("name") or f"Hero {hero_id}")
        logger.info(f"Loaded {len(names)} hero names")
        return names

    @staticmethod
    def matches_cache_key(account_id: int, days: Optional[int], filters: QueueFilters) -> str:
        """Cache key identifying one (player, window, queue) match list."""
        return f"m:{account_id}:{days if days is not None else 'all'}:{filters.cache_fragment()}"

    async def get_player_matches(
        self,
        account_id: int,
        days: Optional[int] = None,
        filters: Optional[QueueFilters] = None,
    ) -> List[MatchRecord]:
        """
        Get a player's projected match rows.

        Args:
            account_id: 32-bit account id
            days: Upstream day-granular window (None = all time)
            filters: Queue filters applied upstream

        Returns:
            Records in upstream order; raises UpstreamError when the fetch fails
        """
        filters = filters or QueueFilters()
        key = self.matches_cache_key(account_id, days, filters)

        async def _produce() -> List[MatchRecord]:
            rows = await self.api_client.get_player_matches(
                account_id,
                limit=self.match_list_limit,
                days=days,
                game_mode=filters.game_mode,
                lobby_type=filters.lobby_type,
            )
            records = [MatchRecord.from_api(row) for row in rows if isinstance(row, dict)]
            logger.info(f"Fetched {len(records)} matches for account {account_id}")
            return records

        return await self.cache.get_or_compute(key, self.matches_ttl, _produce)

    async def get_match_detail(self, match_id: int) -> Dict[str, Any]:
        """Get the full detail payload of one match (not cached)."""
        return await self.api_client.get_match(match_id)

    async def request_parse(self, match_id: int) -> None:
        """Ask the upstream to parse a match; the job result is not awaited."""
        await self.api_client.request_parse(match_id)
        logger.debug(f"Parse requested for match {match_id}")
