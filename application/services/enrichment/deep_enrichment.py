"""Bounded-concurrency per-match detail enrichment."""
from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence, Tuple

from config import settings
from core.logging import get_logger
from domain.entities import MatchRecord, find_player
from domain.interfaces import IMatchRepository
from infrastructure.api import UpstreamError
from .farm_profile import FarmProfileExtractor
from .models import (
    DeepStatsAccumulator,
    EnrichmentOutcome,
    EnrichmentResult,
    EnrichmentStatus,
    MatchContribution,
    warnings_from,
)


class DeepEnrichmentWorker:
    """
    Fetches full match detail for the most recent ``deep_limit`` matches.

    Design:
    - Targets go into an ``asyncio.Queue`` drained by a fixed pool of
      ``concurrency`` workers; upstream pacing is the client's job.
    - Each task ends in exactly one ``EnrichmentOutcome``; a failing task
      never stops the others.
    - Outcomes are reduced into a ``DeepStatsAccumulator`` only after the
      pool is done, in target order, so no counters are shared between
      workers.
    """

    def __init__(
        self,
        repository: IMatchRepository,
        *,
        concurrency: Optional[int] = None,
        farm_extractor: Optional[FarmProfileExtractor] = None,
    ):
        self.repository = repository
        self.concurrency = max(1, concurrency or settings.DEEP_CONCURRENCY)
        self.farm_extractor = farm_extractor or FarmProfileExtractor()
        self.logger = get_logger(__name__, service="enrichment")

    @staticmethod
    def select_targets(records: Sequence[MatchRecord], deep_limit: int) -> List[MatchRecord]:
        """The newest ``deep_limit`` records of a time-ascending window."""
        if deep_limit <= 0:
            return []
        return list(records[-deep_limit:])

    async def enrich(
        self,
        records: Sequence[MatchRecord],
        account_id: int,
        deep_limit: Optional[int] = None,
        request_parse_if_missing: bool = False,
    ) -> EnrichmentResult:
        limit = settings.DEEP_MATCH_LIMIT if deep_limit is None else deep_limit
        targets = self.select_targets(records, limit)
        outcomes = await self._run_pool(targets, account_id, request_parse_if_missing)

        acc = DeepStatsAccumulator(attempted=len(targets))
        for outcome in outcomes:
            acc.add(outcome)

        failed = sum(1 for o in outcomes if o.status is EnrichmentStatus.FAILED)
        self.logger.info(
            lambda: f"deep enrichment: {acc.with_details}/{len(targets)} with details, "
            f"{acc.parse_requested} parse requested, {failed} failed"
        )
        return EnrichmentResult(
            stats=acc.snapshot(),
            outcomes=outcomes,
            warnings=warnings_from(outcomes),
        )

    async def _run_pool(
        self,
        targets: List[MatchRecord],
        account_id: int,
        request_parse_if_missing: bool,
    ) -> List[EnrichmentOutcome]:
        if not targets:
            return []

        queue: asyncio.Queue[Tuple[int, MatchRecord]] = asyncio.Queue()
        for item in enumerate(targets):
            queue.put_nowait(item)
        results: List[Optional[EnrichmentOutcome]] = [None] * len(targets)

        async def worker() -> None:
            while True:
                try:
                    idx, record = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                try:
                    results[idx] = await self._process(record, account_id, request_parse_if_missing)
                finally:
                    queue.task_done()

        await asyncio.gather(*(worker() for _ in range(min(self.concurrency, len(targets)))))
        return [r for r in results if r is not None]

    async def _process(
        self,
        record: MatchRecord,
        account_id: int,
        request_parse_if_missing: bool,
    ) -> EnrichmentOutcome:
        match_id = record.match_id
        try:
            detail = await self.repository.get_match_detail(match_id)
        except UpstreamError as exc:
            self.logger.warning(
                lambda: f"detail fetch failed for match {match_id}: {exc}",
                extra={"match_id": match_id, "status_code": exc.status_code},
            )
            return EnrichmentOutcome(
                match_id=match_id,
                status=EnrichmentStatus.FAILED,
                reason=str(exc),
                status_code=exc.status_code,
            )
        except Exception as exc:
            self.logger.exception(lambda: f"detail processing failed for match {match_id}")
            return EnrichmentOutcome(match_id=match_id, status=EnrichmentStatus.FAILED, reason=repr(exc))

        player = find_player(detail, account_id)
        if player is None or not player.has_useful_data:
            if request_parse_if_missing:
                return await self._request_parse(match_id)
            return EnrichmentOutcome(
                match_id=match_id,
                status=EnrichmentStatus.NO_DETAILS,
                reason="player not in match" if player is None else "match not parsed",
            )

        farm = self.farm_extractor.extract(player.gold_t)
        return EnrichmentOutcome(
            match_id=match_id,
            status=EnrichmentStatus.USEFUL,
            contribution=MatchContribution.from_player(player, farm),
        )

    async def _request_parse(self, match_id: int) -> EnrichmentOutcome:
        try:
            await self.repository.request_parse(match_id)
        except Exception as exc:
            # Fire-and-forget: a failed parse request only loses the backfill.
            self.logger.debug(lambda: f"parse request failed for match {match_id}: {exc}")
            return EnrichmentOutcome(
                match_id=match_id,
                status=EnrichmentStatus.NO_DETAILS,
                reason=f"parse request failed: {exc}",
            )
        return EnrichmentOutcome(match_id=match_id, status=EnrichmentStatus.PARSE_REQUESTED)
