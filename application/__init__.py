"""Application layer - Services and use cases."""
from .services import AggregationEngine, DeepEnrichmentWorker, MatchWindowFilter
from .use_cases import BuildPlayerReportUseCase, ReportRequest

__all__ = [
    'AggregationEngine',
    'DeepEnrichmentWorker',
    'MatchWindowFilter',
    'BuildPlayerReportUseCase',
    'ReportRequest',
]
