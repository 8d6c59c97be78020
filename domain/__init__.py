"""Domain layer - Business entities, enums, and interfaces."""
from .entities import MatchRecord, DetailPlayer, Report
from .enums import Lane, QueueKey, QueueFilters, RangeKey
from .interfaces import IMatchRepository

__all__ = [
    # Entities
    'MatchRecord',
    'DetailPlayer',
    'Report',
    # Enums
    'Lane',
    'QueueKey',
    'QueueFilters',
    'RangeKey',
    # Interfaces
    'IMatchRepository',
]
