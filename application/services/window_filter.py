"""Exact time-window cut of a player's match list."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from domain.entities import MatchRecord
from domain.enums import QueueFilters

logger = logging.getLogger(__name__)


class MatchWindowFilter:
    """
    Narrows a match list to ``start <= start_time <= end`` (unix seconds),
    or ``start <= start_time < end`` with ``end_inclusive=False`` for
    calendar-year windows.

    The upstream ``date`` filter works in whole days and queue filters are
    already part of the fetch, so this stage only makes the second-granular
    cut and puts the survivors in time order. The aggregation pass relies
    on that order.
    """

    def filter(
        self,
        records: Iterable[MatchRecord],
        start: int,
        end: int,
        filters: Optional[QueueFilters] = None,
        *,
        end_inclusive: bool = True,
    ) -> List[MatchRecord]:
        records = list(records)
        if end_inclusive:
            kept = [r for r in records if start <= r.start_time <= end]
        else:
            kept = [r for r in records if start <= r.start_time < end]
        # sorted() is stable: equal timestamps keep their upstream order
        kept = sorted(kept, key=lambda r: r.start_time)
        logger.debug(
            f"window [{start}, {end}{']' if end_inclusive else ')'} kept {len(kept)}/{len(records)} matches"
            + (f" (upstream filters {filters.cache_fragment()})" if filters else "")
        )
        return kept
