"""Application use cases."""
from .build_player_report import BuildPlayerReportUseCase, ReportRequest

__all__ = [
    'BuildPlayerReportUseCase',
    'ReportRequest',
]
