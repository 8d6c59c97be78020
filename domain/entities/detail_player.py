"""Detail player entity: the parsed per-player block of a full match."""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from .match_record import as_int, as_number, as_optional_int

_WARD_FIELDS = ("obs_placed", "sen_placed", "obs_killed", "sen_killed")


def _optional_number(row: Mapping[str, Any], key: str) -> Optional[float]:
    value = row.get(key)
    return None if value is None else as_number(value)


@dataclass(frozen=True)
class DetailPlayer:
    """A player's row inside a match detail.

    Parsed-only fields are None when the match has not been parsed
    upstream, which is how an unparsed match is told apart from a parsed
    one where the player simply placed no wards.
    """

    account_id: Optional[int]
    hero_id: int = 0

    # Vision
    obs_placed: Optional[int] = None
    sen_placed: Optional[int] = None
    obs_killed: Optional[int] = None
    sen_killed: Optional[int] = None

    # Support stats
    healing: Optional[float] = None
    stuns: Optional[float] = None

    # Item keys in purchase order
    purchase_log: Optional[tuple[str, ...]] = None
    # Cumulative net worth per minute, index 0 = minute 0
    gold_t: Optional[tuple[float, ...]] = None

    @property
    def has_ward_data(self) -> bool:
        """Whether any ward counter was reported."""
        return any(getattr(self, name) is not None for name in _WARD_FIELDS)

    @property
    def has_useful_data(self) -> bool:
        """Whether the row carries anything deep enrichment can use."""
        return (
            self.has_ward_data
            or self.purchase_log is not None
            or self.gold_t is not None
            or self.healing is not None
            or self.stuns is not None
        )

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> 'DetailPlayer':
        """Build from an upstream player block; bad numbers become 0."""
        # hero_healing is the parsed figure; plain healing is a legacy alias
        healing = _optional_number(row, "hero_healing")
        if healing is None:
            healing = _optional_number(row, "healing")

        purchase_log = None
        raw_log = row.get("purchase_log")
        if isinstance(raw_log, list):
            purchase_log = tuple(
                str(item.get("key") or "") if isinstance(item, Mapping) else ""
                for item in raw_log
            )

        gold_t = None
        raw_gold = row.get("gold_t")
        if isinstance(raw_gold, list):
            gold_t = tuple(as_number(v) for v in raw_gold)

        return cls(
            account_id=as_optional_int(row.get("account_id")),
            hero_id=as_int(row.get("hero_id")),
            obs_placed=as_optional_int(row.get("obs_placed")),
            sen_placed=as_optional_int(row.get("sen_placed")),
            obs_killed=as_optional_int(row.get("obs_killed")),
            sen_killed=as_optional_int(row.get("sen_killed")),
            healing=healing,
            stuns=_optional_number(row, "stuns"),
            purchase_log=purchase_log,
            gold_t=gold_t,
        )


def find_player(detail: Optional[Mapping[str, Any]], account_id: int) -> Optional[DetailPlayer]:
    """Locate ``account_id``'s row in a match detail payload."""
    if not isinstance(detail, Mapping):
        return None
    players = detail.get("players")
    if not isinstance(players, Sequence) or isinstance(players, str):
        return None
    for row in players:
        if isinstance(row, Mapping) and row.get("account_id") == account_id:
            return DetailPlayer.from_api(row)
    return None
