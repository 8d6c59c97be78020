"""Early/mid/late gold rates from a cumulative net-worth series."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from domain.entities import FarmProfileSummary
from domain.entities.report import ratio

EARLY_END_MIN = 10
MID_END_MIN = 25


@dataclass(frozen=True, slots=True)
class FarmProfile:
    """Gold per minute in each game phase for one match."""
    early: float
    mid: float
    late: float


class FarmProfileExtractor:
    """
    Splits a per-minute cumulative net-worth series (index 0 = minute 0)
    at minutes 10 and 25. Indices past the end of a short game are clamped
    to the last minute, so phases the game never reached contribute 0.
    """

    def extract(self, gold_t: Optional[Sequence[float]]) -> Optional[FarmProfile]:
        if not gold_t or len(gold_t) <= 1:
            return None
        mins = len(gold_t) - 1

        def at(minute: int) -> float:
            return gold_t[min(minute, mins)]

        early_gold = max(0, at(EARLY_END_MIN) - at(0))
        mid_gold = max(0, at(MID_END_MIN) - at(EARLY_END_MIN))
        late_gold = max(0, gold_t[mins] - at(MID_END_MIN))

        early_len = max(1, min(EARLY_END_MIN, mins))
        mid_len = max(1, min(MID_END_MIN - EARLY_END_MIN, max(0, mins - EARLY_END_MIN)))
        late_len = max(1, max(0, mins - MID_END_MIN))

        return FarmProfile(
            early=early_gold / early_len,
            mid=mid_gold / mid_len,
            late=late_gold / late_len,
        )


class FarmProfileTotals:
    """Running sums of per-match profiles; only matches with a usable series count."""

    def __init__(self):
        self.early = 0.0
        self.mid = 0.0
        self.late = 0.0
        self.matches_used = 0

    def add(self, profile: Optional[FarmProfile]) -> None:
        if profile is None:
            return
        self.early += profile.early
        self.mid += profile.mid
        self.late += profile.late
        self.matches_used += 1

    def summary(self) -> FarmProfileSummary:
        return FarmProfileSummary(
            early_gpm=ratio(self.early, self.matches_used),
            mid_gpm=ratio(self.mid, self.matches_used),
            late_gpm=ratio(self.late, self.matches_used),
            matches_used=self.matches_used,
        )
