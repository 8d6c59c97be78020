from __future__ import annotations

import asyncio

from conftest import FakeRepository, detail_with_player, make_record

from application.services import DeepEnrichmentWorker
from application.services.enrichment import RATE_LIMIT_WARNING, EnrichmentStatus
from infrastructure.api import UpstreamError

ACCOUNT = 42


def _window(n: int):
    return [make_record(i, 1000 + i) for i in range(1, n + 1)]


def _enrich(repo, records, deep_limit, parse=False, concurrency=2):
    worker = DeepEnrichmentWorker(repo, concurrency=concurrency)
    return asyncio.run(worker.enrich(records, ACCOUNT, deep_limit, parse))


def test_targets_are_most_recent_matches() -> None:
    records = _window(10)

    targets = DeepEnrichmentWorker.select_targets(records, 3)

    assert [r.match_id for r in targets] == [8, 9, 10]
    assert DeepEnrichmentWorker.select_targets(records, 0) == []
    assert len(DeepEnrichmentWorker.select_targets(records, 50)) == 10


def test_zero_limit_fetches_nothing() -> None:
    repo = FakeRepository()

    result = _enrich(repo, _window(5), 0)

    assert repo.detail_calls == []
    assert result.stats.attempted == 0
    assert result.stats.with_details == 0
    assert result.warnings == []


def test_sums_and_per_game_use_matches_with_details() -> None:
    repo = FakeRepository(details={
        1: detail_with_player(
            ACCOUNT,
            obs_placed=4, sen_placed=2, obs_killed=1, sen_killed=0,
            hero_healing=1500, stuns=10.4,
            purchase_log=[{"key": "ward_observer"}, {"key": "smoke_of_deceit"}, {"key": "blink"}],
        ),
        2: detail_with_player(
            ACCOUNT,
            obs_placed=6, sen_placed=4, obs_killed=3, sen_killed=2,
            healing=500, stuns=2.5,
            purchase_log=[{"key": "dust"}, {"key": "ward_sentry"}, {"key": "ward_sentry"}],
        ),
        3: {"players": [{"account_id": ACCOUNT, "hero_id": 1}]},
    })

    result = _enrich(repo, _window(3), 3)
    stats = result.stats

    assert stats.attempted == 3
    assert stats.with_details == 2
    assert stats.wards.obs_placed == 10
    assert stats.wards.sen_killed == 2
    assert stats.wards_per_game.obs_placed == 5
    assert stats.wards_per_game.sen_placed == 3
    assert stats.healing == 2000
    # 10.4 rounds to 10, 2.5 rounds half up to 3
    assert stats.stuns == 13
    assert stats.purchases.to_dict() == {"smoke": 1, "dust": 1, "obs": 1, "sen": 2}
    assert sorted(repo.detail_calls) == [1, 2, 3]


def test_farm_profile_only_counts_matches_with_series() -> None:
    repo = FakeRepository(details={
        1: detail_with_player(ACCOUNT, gold_t=[1000 * m for m in range(30)]),
        2: detail_with_player(ACCOUNT, obs_placed=1),
    })

    stats = _enrich(repo, _window(2), 2).stats

    assert stats.with_details == 2
    assert stats.farm_profile.matches_used == 1
    assert stats.farm_profile.mid_gpm == 1000


def test_rate_limited_failures_add_one_warning(rate_limited) -> None:
    repo = FakeRepository(details={
        1: rate_limited,
        2: rate_limited,
        3: detail_with_player(ACCOUNT, obs_placed=2),
    })

    result = _enrich(repo, _window(3), 3)

    assert result.warnings == [RATE_LIMIT_WARNING]
    assert result.stats.with_details == 1
    assert result.stats.wards_per_game.obs_placed == 2


def test_other_failures_do_not_warn_or_abort() -> None:
    repo = FakeRepository(details={
        1: UpstreamError("HTTP 404", status_code=404),
        2: RuntimeError("bad payload"),
        3: detail_with_player(ACCOUNT, obs_placed=2),
    })

    result = _enrich(repo, _window(3), 3)

    statuses = [o.status for o in result.outcomes]
    assert statuses == [EnrichmentStatus.FAILED, EnrichmentStatus.FAILED, EnrichmentStatus.USEFUL]
    assert result.warnings == []
    assert result.stats.with_details == 1


def test_parse_requested_for_unparsed_matches() -> None:
    repo = FakeRepository(details={
        1: {"players": [{"account_id": ACCOUNT, "hero_id": 1}]},
        2: {"players": [{"account_id": 7, "hero_id": 1}]},
        3: detail_with_player(ACCOUNT, obs_placed=1),
    })

    result = _enrich(repo, _window(3), 3, parse=True)

    assert sorted(repo.parse_calls) == [1, 2]
    assert result.stats.parse_requested == 2
    assert result.stats.with_details == 1


def test_parse_not_requested_unless_asked() -> None:
    repo = FakeRepository(details={1: {"players": []}})

    result = _enrich(repo, _window(1), 1)

    assert repo.parse_calls == []
    assert result.outcomes[0].status is EnrichmentStatus.NO_DETAILS


def test_failed_parse_request_is_swallowed() -> None:
    repo = FakeRepository(
        details={1: {"players": []}},
        parse_error=UpstreamError("HTTP 500", status_code=500),
    )

    result = _enrich(repo, _window(1), 1, parse=True)

    assert repo.parse_calls == [1]
    assert result.stats.parse_requested == 0
    assert result.outcomes[0].status is EnrichmentStatus.NO_DETAILS


def test_malformed_detail_is_no_details() -> None:
    repo = FakeRepository(details={1: {"players": "oops"}, 2: None})

    result = _enrich(repo, _window(2), 2)

    assert [o.status for o in result.outcomes] == [EnrichmentStatus.NO_DETAILS] * 2


def test_concurrency_is_bounded() -> None:
    in_flight = {"now": 0, "peak": 0}

    class SlowRepository(FakeRepository):
        async def get_match_detail(self, match_id):
            in_flight["now"] += 1
            in_flight["peak"] = max(in_flight["peak"], in_flight["now"])
            await asyncio.sleep(0.005)
            in_flight["now"] -= 1
            return detail_with_player(ACCOUNT, obs_placed=1)

    result = _enrich(SlowRepository(), _window(8), 8, concurrency=3)

    assert in_flight["peak"] == 3
    assert result.stats.with_details == 8
    assert [o.match_id for o in result.outcomes] == list(range(1, 9))
