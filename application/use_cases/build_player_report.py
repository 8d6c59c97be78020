"""Use case for building a player's recap report."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from config import settings
from core.logging import get_logger, log_scope
from domain.entities import Report, ReportFilters
from domain.enums import QueueKey, RangeKey, calendar_year_bounds
from domain.interfaces import IMatchRepository
from application.services.aggregation import AggregationEngine
from application.services.enrichment import DeepEnrichmentWorker
from application.services.window_filter import MatchWindowFilter


@dataclass(frozen=True)
class ReportRequest:
    """Validated inputs of one report computation."""

    account_id: int
    range_key: RangeKey = RangeKey.LAST_YEAR
    queue_key: QueueKey = QueueKey.ALL
    deep_limit: int = settings.DEEP_MATCH_LIMIT
    request_parse_if_missing: bool = False
    year: Optional[int] = None  # calendar-year window; overrides range_key


class BuildPlayerReportUseCase:
    """
    Builds a ``Report`` for one player.

    Pipeline:
    ─────────────────────────────────────────────────────────────────
    hero table (cached)  ─┐
    match list (cached)  ─┴→ exact window → aggregation ─┐
                                          └→ deep enrichment ─┴→ Report
    ─────────────────────────────────────────────────────────────────
    Only the hero table and the match list may fail the whole report;
    enrichment problems end up in ``Report.warnings``.
    """

    def __init__(
        self,
        repository: IMatchRepository,
        *,
        window_filter: Optional[MatchWindowFilter] = None,
        engine: Optional[AggregationEngine] = None,
        enrichment: Optional[DeepEnrichmentWorker] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.repository = repository
        self.window_filter = window_filter or MatchWindowFilter()
        self.engine = engine or AggregationEngine()
        self.enrichment = enrichment or DeepEnrichmentWorker(repository)
        self._clock = clock
        self.logger = get_logger(__name__, service="report")

    async def execute(self, request: ReportRequest) -> Report:
        filters = request.queue_key.filters
        if request.year is not None:
            # Half-open [Jan 1 Y, Jan 1 Y+1); the day-granular upstream filter
            # counts back from today, so year mode fetches the whole history.
            start, end = calendar_year_bounds(request.year)
            days = (end - start) // 86400
            fetch_days = None
            range_label = "year"
        else:
            start, end = request.range_key.unix_bounds(self._clock())
            days = fetch_days = request.range_key.days
            range_label = request.range_key.value

        with log_scope(account_id=request.account_id, range=range_label, queue=request.queue_key.value):
            self.logger.info(lambda: f"building report for account {request.account_id}")
            started = time.perf_counter()

            hero_names = await self.repository.get_hero_names()
            matches = await self.repository.get_player_matches(request.account_id, fetch_days, filters)

            window = self.window_filter.filter(
                matches, start, end, filters, end_inclusive=request.year is None
            )
            aggregate = self.engine.aggregate(window, hero_names)
            enriched = await self.enrichment.enrich(
                window,
                request.account_id,
                request.deep_limit,
                request.request_parse_if_missing,
            )

            report = Report(
                filters=ReportFilters(
                    range=range_label,
                    queue=request.queue_key.value,
                    days=days,
                    deep_used=enriched.stats.attempted,
                    year=request.year,
                ),
                aggregate=aggregate,
                deep=enriched.stats,
                warnings=tuple(enriched.warnings),
            )
            self.logger.success(
                lambda: f"report ready: {aggregate.totals.matches} matches, "
                f"{len(report.warnings)} warning(s)",
                extra={"execution_time_ms": round((time.perf_counter() - started) * 1000.0, 2)},
            )
            return report
