"""Match-list aggregation."""
from .engine import AggregationEngine, TRACKED_STATS
from .state import AggregationState

__all__ = [
    "AggregationEngine",
    "AggregationState",
    "TRACKED_STATS",
]
