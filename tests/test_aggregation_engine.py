from __future__ import annotations

import pytest

from conftest import make_record

from application.services import AggregationEngine
from domain.entities import MatchRecord

HEROES = {1: "Anti-Mage", 2: "Axe", 5: "Crystal Maiden"}


def _aggregate(records, hero_names=HEROES):
    return AggregationEngine().aggregate(records, hero_names)


def test_empty_window_yields_zeros_and_null_records() -> None:
    result = _aggregate([])

    assert result.totals.matches == 0
    assert result.totals.winrate == 0
    assert result.totals.avg_gpm == 0
    assert result.longest_win == result.longest_loss == 0
    assert all(record is None for record in result.records.values())
    assert set(result.records) == {"most_kills", "most_deaths", "most_assists", "best_gpm", "best_xpm"}
    assert result.top_heroes == ()
    assert result.lanes == ()
    assert result.gpm_histogram == ()
    assert result.hero_diversity == 0


def test_totals_and_side_splits() -> None:
    records = [
        make_record(1, 10, won=True, radiant=True, duration=3600),
        make_record(2, 20, won=False, radiant=True, duration=1800),
        make_record(3, 30, won=True, radiant=False, duration=1800),
        make_record(4, 40, won=False, radiant=False, duration=1800),
        make_record(5, 50, won=True, radiant=False, duration=1800),
    ]

    result = _aggregate(records)

    assert result.totals.matches == 5
    assert result.totals.wins == 3
    assert result.totals.winrate == 60.0
    assert result.totals.playtime_hours == 3.0
    assert result.radiant.matches + result.dire.matches == 5
    assert result.radiant.wins + result.dire.wins == result.totals.wins
    assert (result.radiant.wins, result.dire.wins) == (1, 2)
    assert result.dire.winrate == 66.67


def test_streaks() -> None:
    outcomes = [True, True, False, False, False, True, True, True, True, False]
    records = [make_record(i, i, won=w) for i, w in enumerate(outcomes)]

    result = _aggregate(records)

    assert result.longest_win == 4
    assert result.longest_loss == 3


def test_alternating_results_have_unit_streaks() -> None:
    records = [make_record(i, i, won=i % 2 == 0) for i in range(6)]

    result = _aggregate(records)

    assert result.longest_win == 1
    assert result.longest_loss == 1


def test_all_wins_streak_covers_the_window() -> None:
    records = [make_record(i, i, won=True, radiant=i % 2 == 0) for i in range(5)]

    result = _aggregate(records)

    assert result.longest_win == 5
    assert result.longest_loss == 0


def test_record_picks_maximum() -> None:
    records = [
        make_record(1, 10, kills=2, hero_id=1),
        make_record(2, 20, kills=5, hero_id=2),
        make_record(3, 30, kills=3, hero_id=5),
    ]

    record = _aggregate(records).records["most_kills"]

    assert record.match_id == 2
    assert record.value == 5
    assert record.hero_name == "Axe"
    assert record.to_dict() == {
        "match_id": 2,
        "kills": 5,
        "hero_id": 2,
        "start_time": 20,
        "hero_name": "Axe",
    }


def test_record_tie_keeps_earliest_match() -> None:
    records = [make_record(1, 10, kills=5), make_record(2, 20, kills=5)]

    assert _aggregate(records).records["most_kills"].match_id == 1


def test_gpm_record_uses_gpm_key() -> None:
    records = [make_record(1, 10, gpm=512.5), make_record(2, 20, gpm=498)]

    record = _aggregate(records).records["best_gpm"]

    assert record.to_dict()["gpm"] == 512.5


def test_top_heroes_ordering_and_ties() -> None:
    records = [
        make_record(1, 1, hero_id=5),
        make_record(2, 2, hero_id=2),
        make_record(3, 3, hero_id=9),
        make_record(4, 4, hero_id=5, won=False),
        make_record(5, 5, hero_id=2),
        make_record(6, 6, hero_id=1),
    ]

    result = _aggregate(records)

    assert [h.hero_id for h in result.top_heroes] == [2, 5, 1]
    assert result.hero_diversity == 4
    assert result.top_heroes[1].winrate == 50.0


def test_unknown_hero_gets_placeholder_name() -> None:
    result = _aggregate([make_record(1, 1, hero_id=9, kills=1)])

    assert result.top_heroes[0].name == "Hero 9"
    assert result.records["most_kills"].hero_name == "Hero 9"


def test_hero_kda_treats_zero_deaths_as_one() -> None:
    records = [make_record(1, 1, hero_id=1, kills=10, assists=5, deaths=0)]

    hero = _aggregate(records).top_heroes[0]

    assert hero.kda == 15.0
    assert hero.to_dict()["avg_d"] == 0


def test_lanes_in_fixed_order_with_unknown() -> None:
    records = [
        make_record(1, 1, lane=2),
        make_record(2, 2, lane=None),
        make_record(3, 3, lane=1),
        make_record(4, 4, lane=7),
        make_record(5, 5, lane=2, won=False),
    ]

    lanes = {l.lane: l.split for l in _aggregate(records).lanes}

    assert list(lanes) == ["safe", "mid", "unknown"]
    assert lanes["mid"].matches == 2
    assert lanes["mid"].wins == 1
    assert lanes["unknown"].matches == 2


def test_histograms_bucket_by_floor() -> None:
    records = [
        make_record(1, 1, gpm=399, xpm=0),
        make_record(2, 2, gpm=400, xpm=650),
        make_record(3, 3, gpm=450, xpm=699.9),
    ]

    result = _aggregate(records)

    assert [(b.bucket, b.count) for b in result.gpm_histogram] == [(300, 1), (400, 2)]
    assert [(b.bucket, b.count) for b in result.xpm_histogram] == [(0, 1), (600, 2)]
    assert sum(b.count for b in result.gpm_histogram) == result.totals.matches
    assert sum(b.count for b in result.xpm_histogram) == result.totals.matches
    assert result.histogram_step == 100


def test_solo_and_party_split() -> None:
    records = [
        make_record(1, 1, party_size=1),
        make_record(2, 2, party_size=None),
        make_record(3, 3, party_size=3, won=False),
        make_record(4, 4, party_size=2),
    ]

    result = _aggregate(records)

    assert (result.solo.matches, result.solo.wins) == (2, 2)
    assert (result.party.matches, result.party.wins) == (2, 1)


def test_malformed_fields_count_as_zero() -> None:
    rows = [
        {"match_id": 1, "start_time": 10, "player_slot": 0, "radiant_win": True, "hero_id": 1,
         "kills": "abc", "gold_per_min": None, "xp_per_min": float("nan"), "duration": "1800"},
        {"match_id": 2, "start_time": 20, "player_slot": 130, "radiant_win": False, "hero_id": 2,
         "kills": 4, "gold_per_min": 600, "xp_per_min": 700},
    ]
    records = [MatchRecord.from_api(row) for row in rows]

    result = _aggregate(records)

    assert result.totals.matches == 2
    assert result.totals.wins == 2
    assert result.totals.avg_gpm == 300.0
    assert result.totals.playtime_seconds == 1800
    assert result.records["most_kills"].match_id == 2
    assert [(b.bucket, b.count) for b in result.gpm_histogram] == [(0, 1), (600, 1)]


def test_unsorted_input_is_rejected() -> None:
    records = [make_record(1, 20), make_record(2, 10)]

    with pytest.raises(ValueError):
        _aggregate(records)


def test_averages_are_rounded() -> None:
    records = [make_record(1, 1, gpm=400), make_record(2, 2, gpm=401), make_record(3, 3, gpm=401)]

    assert _aggregate(records).totals.avg_gpm == 400.67
