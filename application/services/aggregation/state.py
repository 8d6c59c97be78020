"""Mutable accumulators for one aggregation pass."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from domain.entities import MatchRecord
from domain.entities.report import HISTOGRAM_STEP
from domain.enums import Lane


@dataclass(slots=True)
class Counter:
    """Games/wins pair."""
    games: int = 0
    wins: int = 0

    def add(self, won: bool) -> None:
        self.games += 1
        if won:
            self.wins += 1


@dataclass(slots=True)
class HeroCounter:
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0

    def add(self, record: MatchRecord, won: bool) -> None:
        self.games += 1
        if won:
            self.wins += 1
        self.kills += record.kills
        self.deaths += record.deaths
        self.assists += record.assists


@dataclass(slots=True)
class RecordSlot:
    """Best match seen so far for one stat."""
    match_id: int
    value: float
    hero_id: int
    start_time: int


@dataclass(slots=True)
class StreakTracker:
    cur_win: int = 0
    cur_loss: int = 0
    best_win: int = 0
    best_loss: int = 0

    def add(self, won: bool) -> None:
        if won:
            self.cur_win += 1
            self.cur_loss = 0
            self.best_win = max(self.best_win, self.cur_win)
        else:
            self.cur_loss += 1
            self.cur_win = 0
            self.best_loss = max(self.best_loss, self.cur_loss)


class Histogram:
    """Counts per fixed-width bucket, ``floor(value/step)*step``."""

    __slots__ = ("step", "bins")

    def __init__(self, step: int = HISTOGRAM_STEP):
        self.step = step
        self.bins: Dict[int, int] = {}

    def bucket_of(self, value: float) -> int:
        return int(math.floor((value or 0) / self.step) * self.step)

    def add(self, value: float) -> None:
        bucket = self.bucket_of(value)
        self.bins[bucket] = self.bins.get(bucket, 0) + 1

    def sorted_items(self) -> list[tuple[int, int]]:
        return sorted(self.bins.items())


@dataclass
class AggregationState:
    """Running totals for one report computation.

    Created empty, fed every windowed record once in time order, then
    frozen into an ``AggregateResult`` by the engine.
    """

    matches: int = 0
    wins: int = 0
    playtime_seconds: int = 0
    hero_damage: int = 0
    tower_damage: int = 0
    sum_gpm: float = 0
    sum_xpm: float = 0
    sum_last_hits: int = 0
    sum_denies: int = 0

    streaks: StreakTracker = field(default_factory=StreakTracker)
    radiant: Counter = field(default_factory=Counter)
    dire: Counter = field(default_factory=Counter)
    solo: Counter = field(default_factory=Counter)
    party: Counter = field(default_factory=Counter)

    records: Dict[str, Optional[RecordSlot]] = field(default_factory=dict)
    heroes: Dict[int, HeroCounter] = field(default_factory=dict)
    lanes: Dict[Lane, Counter] = field(default_factory=dict)

    gpm_histogram: Histogram = field(default_factory=Histogram)
    xpm_histogram: Histogram = field(default_factory=Histogram)

    def offer_record(self, key: str, record: MatchRecord, value: float) -> None:
        # Strict ">" keeps the earliest match on ties.
        current = self.records.get(key)
        if current is None or value > current.value:
            self.records[key] = RecordSlot(
                match_id=record.match_id,
                value=value,
                hero_id=record.hero_id,
                start_time=record.start_time,
            )

    def hero(self, hero_id: int) -> HeroCounter:
        counter = self.heroes.get(hero_id)
        if counter is None:
            counter = self.heroes[hero_id] = HeroCounter()
        return counter

    def lane(self, lane: Lane) -> Counter:
        counter = self.lanes.get(lane)
        if counter is None:
            counter = self.lanes[lane] = Counter()
        return counter
