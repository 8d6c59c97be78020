"""Domain entities."""
from .match_record import MatchRecord, PROJECTED_FIELDS, is_radiant
from .detail_player import DetailPlayer, find_player
from .report import (
    AggregateResult,
    DeepStats,
    FarmProfileSummary,
    HeroSummary,
    HistogramBucket,
    LaneSummary,
    PurchaseCounts,
    Report,
    ReportFilters,
    StatRecord,
    Totals,
    WardCounts,
    WinSplit,
)

__all__ = [
    'MatchRecord',
    'PROJECTED_FIELDS',
    'is_radiant',
    'DetailPlayer',
    'find_player',
    'AggregateResult',
    'DeepStats',
    'FarmProfileSummary',
    'HeroSummary',
    'HistogramBucket',
    'LaneSummary',
    'PurchaseCounts',
    'Report',
    'ReportFilters',
    'StatRecord',
    'Totals',
    'WardCounts',
    'WinSplit',
]
