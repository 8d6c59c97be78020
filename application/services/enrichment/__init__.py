"""Deep per-match enrichment."""
from .deep_enrichment import DeepEnrichmentWorker
from .farm_profile import FarmProfile, FarmProfileExtractor, FarmProfileTotals
from .models import (
    RATE_LIMIT_WARNING,
    DeepStatsAccumulator,
    EnrichmentOutcome,
    EnrichmentResult,
    EnrichmentStatus,
    MatchContribution,
)

__all__ = [
    "DeepEnrichmentWorker",
    "FarmProfile",
    "FarmProfileExtractor",
    "FarmProfileTotals",
    "RATE_LIMIT_WARNING",
    "DeepStatsAccumulator",
    "EnrichmentOutcome",
    "EnrichmentResult",
    "EnrichmentStatus",
    "MatchContribution",
]
