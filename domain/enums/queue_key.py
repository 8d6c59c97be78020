"""Queue selection for match list filters."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

GAME_MODE_TURBO = 23
LOBBY_NORMAL = 0
LOBBY_RANKED = 7


@dataclass(frozen=True)
class QueueFilters:
    """Upstream filters derived from a QueueKey (None = not filtered)."""

    game_mode: Optional[int] = None
    lobby_type: Optional[int] = None

    def cache_fragment(self) -> str:
        """Get the part of a cache key that identifies these filters."""
        gm = "any" if self.game_mode is None else self.game_mode
        lt = "any" if self.lobby_type is None else self.lobby_type
        return f"{gm}:{lt}"


class QueueKey(Enum):
    """Which kind of games a report covers."""

    ALL = "all"
    TURBO = "turbo"
    RANKED = "ranked"
    NORMAL = "normal"

    @property
    def filters(self) -> QueueFilters:
        """Get upstream filters for this queue."""
        if self is QueueKey.TURBO:
            return QueueFilters(game_mode=GAME_MODE_TURBO)
        if self is QueueKey.RANKED:
            return QueueFilters(lobby_type=LOBBY_RANKED)
        if self is QueueKey.NORMAL:
            return QueueFilters(lobby_type=LOBBY_NORMAL)
        return QueueFilters()

    @classmethod
    def from_string(cls, value: str) -> 'QueueKey':
        """Create QueueKey from string (case-insensitive)."""
        return cls(value.strip().lower())
