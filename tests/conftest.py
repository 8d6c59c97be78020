"""
Shared builders and fakes for the test-suite.
"""
from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from domain.entities import MatchRecord
from domain.enums import QueueFilters
from domain.interfaces import IMatchRepository
from infrastructure.api import UpstreamError


def make_record(
    match_id: int,
    start_time: int,
    *,
    won: bool = True,
    radiant: bool = True,
    hero_id: int = 1,
    kills: int = 0,
    deaths: int = 0,
    assists: int = 0,
    gpm: float = 400,
    xpm: float = 500,
    duration: int = 1800,
    lane: Optional[int] = 1,
    party_size: Optional[int] = 1,
    **extra: Any,
) -> MatchRecord:
    return MatchRecord(
        match_id=match_id,
        start_time=start_time,
        player_slot=0 if radiant else 128,
        radiant_win=won if radiant else not won,
        hero_id=hero_id,
        kills=kills,
        deaths=deaths,
        assists=assists,
        gold_per_min=gpm,
        xp_per_min=xpm,
        duration=duration,
        lane=lane,
        party_size=party_size,
        **extra,
    )


def detail_with_player(account_id: int, **fields: Any) -> Dict[str, Any]:
    """A match detail payload holding one row for ``account_id`` and one for someone else."""
    return {
        "players": [
            {"account_id": 999, "hero_id": 2, "obs_placed": 50},
            {"account_id": account_id, "hero_id": 1, **fields},
        ]
    }


class FakeRepository(IMatchRepository):
    """In-memory repository; ``details`` values may be exceptions to raise."""

    def __init__(
        self,
        matches: Optional[List[MatchRecord]] = None,
        hero_names: Optional[Dict[int, str]] = None,
        details: Optional[Dict[int, Any]] = None,
        parse_error: Optional[Exception] = None,
    ):
        self.matches = matches or []
        self.hero_names = hero_names or {}
        self.details = details or {}
        self.parse_error = parse_error
        self.detail_calls: List[int] = []
        self.parse_calls: List[int] = []
        self.match_calls: List[tuple] = []

    async def get_hero_names(self) -> Dict[int, str]:
        return dict(self.hero_names)

    async def get_player_matches(
        self,
        account_id: int,
        days: Optional[int] = None,
        filters: Optional[QueueFilters] = None,
    ) -> List[MatchRecord]:
        self.match_calls.append((account_id, days, filters))
        return list(self.matches)

    async def get_match_detail(self, match_id: int) -> Dict[str, Any]:
        self.detail_calls.append(match_id)
        detail = self.details.get(match_id, {})
        if isinstance(detail, Exception):
            raise detail
        return detail

    async def request_parse(self, match_id: int) -> None:
        self.parse_calls.append(match_id)
        if self.parse_error is not None:
            raise self.parse_error


@pytest.fixture
def rate_limited() -> UpstreamError:
    return UpstreamError("HTTP 429", status_code=429)
