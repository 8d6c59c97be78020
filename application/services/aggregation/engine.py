"""Single-pass aggregation of a windowed match list."""
from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from core.logging import get_logger, traceable
from domain.entities import (
    AggregateResult,
    HeroSummary,
    HistogramBucket,
    LaneSummary,
    MatchRecord,
    StatRecord,
    Totals,
    WinSplit,
)
from domain.entities.report import ratio
from domain.enums import Lane
from .state import AggregationState, Counter, Histogram

TOP_HEROES = 3

# report key -> (value key inside the record, value getter)
TRACKED_STATS: Dict[str, Tuple[str, Callable[[MatchRecord], float]]] = {
    "most_kills": ("kills", lambda r: r.kills),
    "most_deaths": ("deaths", lambda r: r.deaths),
    "most_assists": ("assists", lambda r: r.assists),
    "best_gpm": ("gpm", lambda r: r.gold_per_min),
    "best_xpm": ("xpm", lambda r: r.xp_per_min),
}


def hero_display_name(hero_names: Mapping[int, str], hero_id: int) -> str:
    return hero_names.get(hero_id) or f"Hero {hero_id}"


class AggregationEngine:
    """
    Totals, streaks, side splits, records, hero/lane distributions and
    GPM/XPM histograms in one forward pass, O(n).

    Input must already be sorted by ``start_time`` (MatchWindowFilter
    does this); streaks and record tie-breaks depend on it.
    """

    def __init__(self, top_heroes: int = TOP_HEROES):
        self.top_heroes = top_heroes
        self.logger = get_logger(__name__, service="aggregation")

    @traceable
    def aggregate(
        self,
        records: Sequence[MatchRecord],
        hero_names: Optional[Mapping[int, str]] = None,
    ) -> AggregateResult:
        hero_names = hero_names or {}
        state = AggregationState()
        previous_start: Optional[int] = None
        for record in records:
            if previous_start is not None and record.start_time < previous_start:
                raise ValueError("aggregate() needs records sorted by start_time")
            previous_start = record.start_time
            self._consume(state, record)

        result = self._freeze(state, hero_names)
        self.logger.debug(
            lambda: f"aggregated {result.totals.matches} matches, "
            f"{result.hero_diversity} heroes, streaks {result.longest_win}/{result.longest_loss}"
        )
        return result

    def _consume(self, state: AggregationState, record: MatchRecord) -> None:
        won = record.won

        state.matches += 1
        state.playtime_seconds += record.duration
        state.hero_damage += record.hero_damage
        state.tower_damage += record.tower_damage
        if won:
            state.wins += 1
        state.streaks.add(won)

        (state.radiant if record.is_radiant else state.dire).add(won)
        (state.party if record.is_party else state.solo).add(won)

        for key, (_, getter) in TRACKED_STATS.items():
            state.offer_record(key, record, getter(record))

        state.sum_gpm += record.gold_per_min
        state.sum_xpm += record.xp_per_min
        state.sum_last_hits += record.last_hits
        state.sum_denies += record.denies

        state.gpm_histogram.add(record.gold_per_min)
        state.xpm_histogram.add(record.xp_per_min)

        state.hero(record.hero_id).add(record, won)
        state.lane(record.assigned_lane).add(won)

    def _freeze(self, state: AggregationState, hero_names: Mapping[int, str]) -> AggregateResult:
        n = state.matches
        totals = Totals(
            matches=n,
            wins=state.wins,
            playtime_seconds=state.playtime_seconds,
            total_hero_damage=state.hero_damage,
            total_tower_damage=state.tower_damage,
            avg_hero_damage=ratio(state.hero_damage, n),
            avg_gpm=ratio(state.sum_gpm, n),
            avg_xpm=ratio(state.sum_xpm, n),
            avg_last_hits=ratio(state.sum_last_hits, n),
            avg_denies=ratio(state.sum_denies, n),
        )

        records: Dict[str, Optional[StatRecord]] = {}
        for key, (stat, _) in TRACKED_STATS.items():
            slot = state.records.get(key)
            records[key] = None if slot is None else StatRecord(
                stat=stat,
                match_id=slot.match_id,
                value=slot.value,
                hero_id=slot.hero_id,
                start_time=slot.start_time,
                hero_name=hero_display_name(hero_names, slot.hero_id),
            )

        # Most games first; equal counts fall back to the lower hero id.
        ranked = sorted(state.heroes.items(), key=lambda item: (-item[1].games, item[0]))
        top = tuple(
            HeroSummary(
                hero_id=hero_id,
                name=hero_display_name(hero_names, hero_id),
                matches=c.games,
                wins=c.wins,
                kills=c.kills,
                deaths=c.deaths,
                assists=c.assists,
            )
            for hero_id, c in ranked[: self.top_heroes]
        )

        lanes = tuple(
            LaneSummary(lane=lane.value, split=self._split(state.lanes[lane]))
            for lane in Lane.report_order()
            if lane in state.lanes
        )

        return AggregateResult(
            totals=totals,
            radiant=self._split(state.radiant),
            dire=self._split(state.dire),
            longest_win=state.streaks.best_win,
            longest_loss=state.streaks.best_loss,
            records=records,
            top_heroes=top,
            hero_diversity=len(state.heroes),
            lanes=lanes,
            gpm_histogram=self._buckets(state.gpm_histogram),
            xpm_histogram=self._buckets(state.xpm_histogram),
            solo=self._split(state.solo),
            party=self._split(state.party),
            histogram_step=state.gpm_histogram.step,
        )

    @staticmethod
    def _split(counter: Counter) -> WinSplit:
        return WinSplit(matches=counter.games, wins=counter.wins)

    @staticmethod
    def _buckets(histogram: Histogram) -> Tuple[HistogramBucket, ...]:
        return tuple(HistogramBucket(bucket=b, count=c) for b, c in histogram.sorted_items())
