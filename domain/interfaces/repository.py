"""Repository interfaces for data access."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from ..entities import MatchRecord
from ..enums import QueueFilters


class IMatchRepository(ABC):
    """Interface for the upstream match-data source."""

    @abstractmethod
    async def get_hero_names(self) -> Dict[int, str]:
        """Get the hero id -> display name table."""
        pass

    @abstractmethod
    async def get_player_matches(
        self,
        account_id: int,
        days: Optional[int] = None,
        filters: Optional[QueueFilters] = None,
    ) -> List[MatchRecord]:
        """Get a player's projected match rows, newest first as served upstream."""
        pass

    @abstractmethod
    async def get_match_detail(self, match_id: int) -> Dict[str, Any]:
        """Get the full detail payload of one match."""
        pass

    @abstractmethod
    async def request_parse(self, match_id: int) -> None:
        """Queue offline parsing of a match upstream."""
        pass
