"""Application services root exports."""
from .aggregation import AggregationEngine
from .enrichment import DeepEnrichmentWorker, FarmProfileExtractor
from .window_filter import MatchWindowFilter

__all__ = [
    "AggregationEngine",
    "DeepEnrichmentWorker",
    "FarmProfileExtractor",
    "MatchWindowFilter",
]
