"""Report entities: the immutable output of one report computation."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

HISTOGRAM_STEP = 100


def ratio(numerator: float, denominator: float) -> float:
    """numerator/denominator rounded to 2 dp; 0 when the denominator is 0."""
    if not denominator:
        return 0
    return round(numerator / denominator, 2)


def percent(part: int, whole: int) -> float:
    """part as a percentage of whole, 2 dp; 0 when whole is 0."""
    if not whole:
        return 0
    return round(part / whole * 100, 2)


@dataclass(frozen=True)
class WinSplit:
    """Games and wins for one slice of matches (a side, a lane, solo/party)."""

    matches: int = 0
    wins: int = 0

    @property
    def winrate(self) -> float:
        return percent(self.wins, self.matches)

    def to_dict(self) -> dict:
        return {'matches': self.matches, 'wins': self.wins, 'winrate': self.winrate}


@dataclass(frozen=True)
class Totals:
    matches: int = 0
    wins: int = 0
    playtime_seconds: int = 0
    total_hero_damage: int = 0
    total_tower_damage: int = 0
    avg_hero_damage: float = 0
    avg_gpm: float = 0
    avg_xpm: float = 0
    avg_last_hits: float = 0
    avg_denies: float = 0

    @property
    def winrate(self) -> float:
        return percent(self.wins, self.matches)

    @property
    def playtime_hours(self) -> float:
        return round(self.playtime_seconds / 3600, 2)

    def to_dict(self) -> dict:
        return {
            'matches': self.matches,
            'wins': self.wins,
            'winrate': self.winrate,
            'playtime_hours': self.playtime_hours,
            'total_hero_damage': self.total_hero_damage,
            'avg_hero_damage': self.avg_hero_damage,
            'total_tower_damage': self.total_tower_damage,
            'avg_gpm': self.avg_gpm,
            'avg_xpm': self.avg_xpm,
            'avg_last_hits': self.avg_last_hits,
            'avg_denies': self.avg_denies,
        }


@dataclass(frozen=True)
class StatRecord:
    """The match holding the best value of one tracked stat."""

    stat: str  # report key of the value: kills, deaths, assists, gpm, xpm
    match_id: int
    value: float
    hero_id: int
    start_time: int
    hero_name: str

    @property
    def date_utc(self) -> str:
        """start_time as an ISO-8601 UTC timestamp, e.g. 2024-03-01T12:00:00.000Z."""
        moment = datetime.fromtimestamp(self.start_time, tz=timezone.utc)
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_dict(self) -> dict:
        return {
            'match_id': self.match_id,
            self.stat: self.value,
            'hero_id': self.hero_id,
            'start_time': self.start_time,
            'hero_name': self.hero_name,
        }


@dataclass(frozen=True)
class HeroSummary:
    hero_id: int
    name: str
    matches: int
    wins: int
    kills: int
    deaths: int
    assists: int

    @property
    def winrate(self) -> float:
        return percent(self.wins, self.matches)

    @property
    def kda(self) -> float:
        """(kills + assists) / deaths, deathless games counted as one death."""
        return round((self.kills + self.assists) / max(1, self.deaths), 2)

    def to_dict(self) -> dict:
        games = max(1, self.matches)
        return {
            'hero_id': self.hero_id,
            'name': self.name,
            'matches': self.matches,
            'wins': self.wins,
            'winrate': self.winrate,
            'avg_k': round(self.kills / games, 2),
            'avg_d': round(self.deaths / games, 2),
            'avg_a': round(self.assists / games, 2),
            'kda': self.kda,
        }


@dataclass(frozen=True)
class LaneSummary:
    lane: str
    split: WinSplit

    def to_dict(self) -> dict:
        return {'lane': self.lane, **self.split.to_dict()}


@dataclass(frozen=True)
class HistogramBucket:
    bucket: int
    count: int

    def to_dict(self) -> dict:
        return {'bucket': self.bucket, 'count': self.count}


@dataclass(frozen=True)
class AggregateResult:
    """Everything computed from the projected match list alone."""

    totals: Totals
    radiant: WinSplit
    dire: WinSplit
    longest_win: int
    longest_loss: int
    records: dict[str, Optional[StatRecord]]
    top_heroes: tuple[HeroSummary, ...]
    hero_diversity: int
    lanes: tuple[LaneSummary, ...]
    gpm_histogram: tuple[HistogramBucket, ...]
    xpm_histogram: tuple[HistogramBucket, ...]
    solo: WinSplit
    party: WinSplit
    histogram_step: int = HISTOGRAM_STEP


@dataclass(frozen=True)
class WardCounts:
    obs_placed: float = 0
    sen_placed: float = 0
    obs_killed: float = 0
    sen_killed: float = 0

    def to_dict(self) -> dict:
        return {
            'obs_placed': self.obs_placed,
            'sen_placed': self.sen_placed,
            'obs_killed': self.obs_killed,
            'sen_killed': self.sen_killed,
        }


@dataclass(frozen=True)
class PurchaseCounts:
    smoke: int = 0
    dust: int = 0
    obs: int = 0
    sen: int = 0

    def to_dict(self) -> dict:
        return {'smoke': self.smoke, 'dust': self.dust, 'obs': self.obs, 'sen': self.sen}


@dataclass(frozen=True)
class FarmProfileSummary:
    early_gpm: float = 0
    mid_gpm: float = 0
    late_gpm: float = 0
    matches_used: int = 0

    def to_dict(self) -> dict:
        return {
            'early_gpm': self.early_gpm,
            'mid_gpm': self.mid_gpm,
            'late_gpm': self.late_gpm,
            'matches_used': self.matches_used,
        }


@dataclass(frozen=True)
class DeepStats:
    """Per-match detail totals for the enriched subset of a window."""

    attempted: int = 0
    with_details: int = 0
    parse_requested: int = 0
    wards: WardCounts = field(default_factory=WardCounts)
    wards_per_game: WardCounts = field(default_factory=WardCounts)
    healing: float = 0
    stuns: int = 0
    purchases: PurchaseCounts = field(default_factory=PurchaseCounts)
    farm_profile: FarmProfileSummary = field(default_factory=FarmProfileSummary)

    def to_dict(self) -> dict:
        return {
            'meta': {
                'attempted': self.attempted,
                'with_details': self.with_details,
                'parse_requested': self.parse_requested,
            },
            'wards': {**self.wards.to_dict(), 'per_game': self.wards_per_game.to_dict()},
            'healing': self.healing,
            'stuns': self.stuns,
            'purchases': self.purchases.to_dict(),
            'farm_profile': self.farm_profile.to_dict(),
        }


@dataclass(frozen=True)
class ReportFilters:
    range: str
    queue: str
    days: int
    deep_used: int
    year: Optional[int] = None  # set only for calendar-year reports

    def to_dict(self) -> dict:
        return {
            'range': self.range,
            'queue': self.queue,
            'days': self.days,
            'deep_used': self.deep_used,
            'year': self.year,
        }


@dataclass(frozen=True)
class Report:
    """A player's recap for one time window and queue."""

    filters: ReportFilters
    aggregate: AggregateResult
    deep: DeepStats
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert report to the dictionary served to the presentation layer."""
        agg = self.aggregate
        return {
            'filters': self.filters.to_dict(),
            'warnings': list(self.warnings),
            'totals': agg.totals.to_dict(),
            'sides': {'radiant': agg.radiant.to_dict(), 'dire': agg.dire.to_dict()},
            'streaks': {'longest_win': agg.longest_win, 'longest_loss': agg.longest_loss},
            'records': {
                key: (record.to_dict() if record else None)
                for key, record in agg.records.items()
            },
            'heroes': {
                'top3': [h.to_dict() for h in agg.top_heroes],
                'diversity': agg.hero_diversity,
            },
            'lanes': [lane.to_dict() for lane in agg.lanes],
            'histograms': {
                'gpm': [b.to_dict() for b in agg.gpm_histogram],
                'xpm': [b.to_dict() for b in agg.xpm_histogram],
                'step': agg.histogram_step,
            },
            'deep': self.deep.to_dict(),
            'solo_vs_party': {'solo': agg.solo.to_dict(), 'party': agg.party.to_dict()},
            'highlights': self._highlights(),
        }

    def _highlights(self) -> dict:
        """Headline facts of the window: most played hero and best kill game."""
        agg = self.aggregate
        favourite = agg.top_heroes[0] if agg.top_heroes else None
        best = agg.records.get('most_kills')
        return {
            'most_played_hero': (
                {'hero_id': favourite.hero_id, 'name': favourite.name, 'matches': favourite.matches}
                if favourite else None
            ),
            'most_kills_game': (
                {
                    'match_id': best.match_id,
                    'kills': best.value,
                    'date_utc': best.date_utc,
                    'hero_id': best.hero_id,
                    'hero_name': best.hero_name,
                }
                if best else None
            ),
        }
