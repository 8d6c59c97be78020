"""Match record entity: one row of a player's match history."""
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..enums import Lane

# Slots 0-127 are Radiant, 128-255 are Dire.
DIRE_SLOT_OFFSET = 128

# Fields requested from the match list endpoint.
PROJECTED_FIELDS = (
    "match_id",
    "start_time",
    "duration",
    "player_slot",
    "radiant_win",
    "hero_id",
    "kills",
    "deaths",
    "assists",
    "gold_per_min",
    "xp_per_min",
    "last_hits",
    "denies",
    "hero_damage",
    "tower_damage",
    "lane",
    "party_size",
    "game_mode",
    "lobby_type",
)


def as_number(value: Any) -> float:
    """Coerce an upstream numeric field; missing or malformed values are 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(parsed):
        return 0
    return int(parsed) if parsed.is_integer() else parsed


def as_int(value: Any) -> int:
    """Like as_number, truncated to int."""
    return int(as_number(value))


def as_optional_int(value: Any) -> Optional[int]:
    """None stays None; anything else goes through as_int."""
    return None if value is None else as_int(value)


def is_radiant(player_slot: int) -> bool:
    """Whether a player slot belongs to the Radiant side."""
    return player_slot < DIRE_SLOT_OFFSET


@dataclass(frozen=True)
class MatchRecord:
    """A player's row for one match, as projected from the match list."""

    match_id: int
    start_time: int  # Unix timestamp seconds
    player_slot: int
    radiant_win: bool
    hero_id: int

    kills: int = 0
    deaths: int = 0
    assists: int = 0

    gold_per_min: float = 0
    xp_per_min: float = 0
    last_hits: int = 0
    denies: int = 0

    hero_damage: int = 0
    tower_damage: int = 0

    duration: int = 0  # Seconds
    lane: Optional[int] = None
    party_size: Optional[int] = None
    game_mode: Optional[int] = None
    lobby_type: Optional[int] = None

    @property
    def is_radiant(self) -> bool:
        """Whether the player was on the Radiant side."""
        return is_radiant(self.player_slot)

    @property
    def won(self) -> bool:
        """Whether the player's side won."""
        return self.radiant_win == self.is_radiant

    @property
    def assigned_lane(self) -> Lane:
        """Get the player's lane."""
        return Lane.from_code(self.lane)

    @property
    def is_party(self) -> bool:
        """Whether the player queued with at least one friend."""
        return (self.party_size if self.party_size is not None else 1) > 1

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> 'MatchRecord':
        """Build a record from an upstream row without ever raising on bad numbers."""
        return cls(
            match_id=as_int(row.get("match_id")),
            start_time=as_int(row.get("start_time")),
            player_slot=as_int(row.get("player_slot")),
            radiant_win=bool(row.get("radiant_win")),
            hero_id=as_int(row.get("hero_id")),
            kills=as_int(row.get("kills")),
            deaths=as_int(row.get("deaths")),
            assists=as_int(row.get("assists")),
            gold_per_min=as_number(row.get("gold_per_min")),
            xp_per_min=as_number(row.get("xp_per_min")),
            last_hits=as_int(row.get("last_hits")),
            denies=as_int(row.get("denies")),
            hero_damage=as_int(row.get("hero_damage")),
            tower_damage=as_int(row.get("tower_damage")),
            duration=as_int(row.get("duration")),
            lane=as_optional_int(row.get("lane")),
            party_size=as_optional_int(row.get("party_size")),
            game_mode=as_optional_int(row.get("game_mode")),
            lobby_type=as_optional_int(row.get("lobby_type")),
        )
