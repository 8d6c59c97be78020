from __future__ import annotations

import pytest

from application.services import FarmProfileExtractor
from application.services.enrichment import FarmProfileTotals


@pytest.mark.parametrize("series", [None, [], [600]])
def test_missing_or_single_point_series_has_no_profile(series) -> None:
    assert FarmProfileExtractor().extract(series) is None


def test_linear_series_has_flat_profile() -> None:
    gold_t = [1000 * minute for minute in range(30)]

    profile = FarmProfileExtractor().extract(gold_t)

    assert profile.early == pytest.approx(1000)
    assert profile.mid == pytest.approx(1000)
    assert profile.late == pytest.approx(1000)


def test_short_game_only_has_early_phase() -> None:
    gold_t = [0, 300, 700, 1200, 1800, 2500]

    profile = FarmProfileExtractor().extract(gold_t)

    assert profile.early == pytest.approx(500)
    assert profile.mid == 0
    assert profile.late == 0


def test_game_ending_mid_phase() -> None:
    gold_t = [0] * 11 + [5000] * 10
    gold_t[10] = 4000

    profile = FarmProfileExtractor().extract(gold_t)

    # minutes 0..20: early 4000/10, mid (5000-4000)/10, no late phase
    assert profile.early == pytest.approx(400)
    assert profile.mid == pytest.approx(100)
    assert profile.late == 0


def test_decreasing_net_worth_is_clamped_to_zero() -> None:
    gold_t = [1000 * m for m in range(26)] + [20000, 19000]

    profile = FarmProfileExtractor().extract(gold_t)

    assert profile.late == 0


def test_totals_average_only_usable_profiles() -> None:
    extractor = FarmProfileExtractor()
    totals = FarmProfileTotals()
    totals.add(extractor.extract([1000 * m for m in range(30)]))
    totals.add(extractor.extract([500 * m for m in range(30)]))
    totals.add(extractor.extract(None))

    summary = totals.summary()

    assert summary.matches_used == 2
    assert summary.early_gpm == 750
    assert summary.late_gpm == 750


def test_empty_totals_summary_is_zero() -> None:
    summary = FarmProfileTotals().summary()

    assert summary.to_dict() == {"early_gpm": 0, "mid_gpm": 0, "late_gpm": 0, "matches_used": 0}
