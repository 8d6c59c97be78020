"""Domain enumerations."""
from .lane import Lane
from .queue_key import QueueKey, QueueFilters
from .range_key import RangeKey, MIN_YEAR, MAX_YEAR, calendar_year_bounds, current_utc_year

__all__ = [
    'Lane',
    'QueueKey',
    'QueueFilters',
    'RangeKey',
    'MIN_YEAR',
    'MAX_YEAR',
    'calendar_year_bounds',
    'current_utc_year',
]
