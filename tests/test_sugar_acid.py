"""Tests for the citrus sugar/acid estimate and season helpers."""

from __future__ import annotations

import math
from datetime import date

import pytest

from harvest_planner.analysis.seasons import (
    Season,
    current_season,
    months_between,
    season_for_month,
    seasons_for_months,
)
from harvest_planner.analysis.sugar_acid import MAX_GDD, TA_FLOOR, estimate_sugar_acid, is_citrus
from harvest_planner.reference.catalog import Product


class TestEstimateSugarAcid:
    def test_zero_heat(self) -> None:
        est = estimate_sugar_acid(0.0)
        assert est.ssc == pytest.approx(6.0)
        assert est.ta == pytest.approx(2.5)
        assert est.ratio == pytest.approx(2.4)
        assert est.brim_a == pytest.approx(-4.0)

    def test_high_heat_approaches_limits(self) -> None:
        est = estimate_sugar_acid(MAX_GDD)
        assert est.ssc == pytest.approx(13.0, abs=0.2)
        assert est.ta == pytest.approx(0.5, abs=0.02)

    def test_monotonic(self) -> None:
        estimates = [estimate_sugar_acid(g) for g in range(0, 10_001, 500)]
        for earlier, later in zip(estimates, estimates[1:]):
            assert later.ssc >= earlier.ssc
            assert later.ta <= earlier.ta
            assert later.ratio >= earlier.ratio

    def test_negative_clamped(self) -> None:
        assert estimate_sugar_acid(-500.0) == estimate_sugar_acid(0.0)

    def test_above_cap_clamped(self) -> None:
        assert estimate_sugar_acid(50_000.0) == estimate_sugar_acid(MAX_GDD)

    def test_nan_counts_as_zero(self) -> None:
        assert estimate_sugar_acid(math.nan) == estimate_sugar_acid(0.0)

    def test_infinity_counts_as_cap(self) -> None:
        est = estimate_sugar_acid(math.inf)
        assert est == estimate_sugar_acid(MAX_GDD)
        assert all(math.isfinite(v) for v in (est.ssc, est.ta, est.ratio, est.brim_a))

    def test_ta_never_below_floor(self) -> None:
        assert estimate_sugar_acid(math.inf).ta >= TA_FLOOR


class TestIsCitrus:
    def test_citrus(self) -> None:
        assert is_citrus(Product("orange", "Orange", "fruit", "citrus"))

    def test_not_citrus(self) -> None:
        assert not is_citrus(Product("apple", "Apple", "fruit", "pome_fruit"))

    def test_missing_product(self) -> None:
        assert not is_citrus(None)


class TestSeasons:
    @pytest.mark.parametrize(
        ("month", "season"),
        [(12, Season.WINTER), (2, Season.WINTER), (3, Season.SPRING), (8, Season.SUMMER),
         (11, Season.FALL)],
    )  # fmt: skip
    def test_season_for_month(self, month: int, season: Season) -> None:
        assert season_for_month(month) == season

    def test_current_season(self) -> None:
        assert current_season(date(2026, 10, 19)) == Season.FALL

    def test_months_between_wraps_year(self) -> None:
        assert months_between(date(2026, 11, 1), date(2027, 1, 31)) == [11, 12, 1]

    def test_months_between_capped(self) -> None:
        assert len(months_between(date(2026, 1, 1), date(2028, 1, 1))) == 12

    def test_seasons_ordered(self) -> None:
        assert seasons_for_months([11, 12, 1]) == [Season.WINTER, Season.FALL]
