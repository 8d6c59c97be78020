"""Per-target outcomes and the accumulator they are reduced into."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from domain.entities import DeepStats, DetailPlayer, PurchaseCounts, WardCounts
from domain.entities.report import ratio
from .farm_profile import FarmProfile, FarmProfileTotals

RATE_LIMIT_WARNING = "Some deep stats were skipped due to rate limiting."

# purchase_log item key -> purchase counter
TRACKED_ITEMS: Dict[str, str] = {
    "smoke_of_deceit": "smoke",
    "dust": "dust",
    "dust_of_appearance": "dust",
    "ward_observer": "obs",
    "ward_sentry": "sen",
}


class EnrichmentStatus(Enum):
    USEFUL = "useful"
    NO_DETAILS = "no_details"
    PARSE_REQUESTED = "parse_requested"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class MatchContribution:
    """What one parsed match adds to the deep stats."""

    obs_placed: int = 0
    sen_placed: int = 0
    obs_killed: int = 0
    sen_killed: int = 0
    healing: float = 0
    stuns: int = 0
    purchases: Dict[str, int] = field(default_factory=dict)
    farm: Optional[FarmProfile] = None

    @classmethod
    def from_player(cls, player: DetailPlayer, farm: Optional[FarmProfile]) -> "MatchContribution":
        purchases: Dict[str, int] = {}
        for key in player.purchase_log or ():
            counter = TRACKED_ITEMS.get(key)
            if counter:
                purchases[counter] = purchases.get(counter, 0) + 1
        return cls(
            obs_placed=player.obs_placed or 0,
            sen_placed=player.sen_placed or 0,
            obs_killed=player.obs_killed or 0,
            sen_killed=player.sen_killed or 0,
            healing=player.healing or 0,
            stuns=math.floor((player.stuns or 0) + 0.5),
            purchases=purchases,
            farm=farm,
        )


@dataclass(frozen=True, slots=True)
class EnrichmentOutcome:
    """Result of one enrichment task."""

    match_id: int
    status: EnrichmentStatus
    contribution: Optional[MatchContribution] = None
    reason: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def rate_limited(self) -> bool:
        return self.status is EnrichmentStatus.FAILED and self.status_code == 429


class DeepStatsAccumulator:
    """Mutable totals for one enrichment pass; ``snapshot`` freezes them."""

    def __init__(self, attempted: int = 0):
        self.attempted = attempted
        self.with_details = 0
        self.parse_requested = 0
        self.obs_placed = 0
        self.sen_placed = 0
        self.obs_killed = 0
        self.sen_killed = 0
        self.healing: float = 0
        self.stuns = 0
        self.purchases: Dict[str, int] = {"smoke": 0, "dust": 0, "obs": 0, "sen": 0}
        self.farm = FarmProfileTotals()

    def add(self, outcome: EnrichmentOutcome) -> None:
        if outcome.status is EnrichmentStatus.PARSE_REQUESTED:
            self.parse_requested += 1
            return
        if outcome.status is not EnrichmentStatus.USEFUL or outcome.contribution is None:
            return
        c = outcome.contribution
        self.with_details += 1
        self.obs_placed += c.obs_placed
        self.sen_placed += c.sen_placed
        self.obs_killed += c.obs_killed
        self.sen_killed += c.sen_killed
        self.healing += c.healing
        self.stuns += c.stuns
        for name, count in c.purchases.items():
            self.purchases[name] = self.purchases.get(name, 0) + count
        self.farm.add(c.farm)

    def snapshot(self) -> DeepStats:
        games = self.with_details
        return DeepStats(
            attempted=self.attempted,
            with_details=games,
            parse_requested=self.parse_requested,
            wards=WardCounts(
                obs_placed=self.obs_placed,
                sen_placed=self.sen_placed,
                obs_killed=self.obs_killed,
                sen_killed=self.sen_killed,
            ),
            # Averaged over matches that had details, not over all attempts.
            wards_per_game=WardCounts(
                obs_placed=ratio(self.obs_placed, games),
                sen_placed=ratio(self.sen_placed, games),
                obs_killed=ratio(self.obs_killed, games),
                sen_killed=ratio(self.sen_killed, games),
            ),
            healing=self.healing,
            stuns=self.stuns,
            purchases=PurchaseCounts(**self.purchases),
            farm_profile=self.farm.summary(),
        )


@dataclass(frozen=True)
class EnrichmentResult:
    stats: DeepStats
    outcomes: List[EnrichmentOutcome]
    warnings: List[str]


def warnings_from(outcomes: List[EnrichmentOutcome]) -> List[str]:
    """User-facing caveats derived from task outcomes, at most one per kind."""
    warnings: List[str] = []
    if any(o.rate_limited for o in outcomes):
        warnings.append(RATE_LIMIT_WARNING)
    return warnings
