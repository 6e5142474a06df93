"""Tests for harvest status classification."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from harvest_planner.analysis.harvest_status import (
    DISCOVERY_STATUSES,
    HarvestStatus,
    classify,
    classify_for_discovery,
    format_day,
    to_discovery_status,
)
from harvest_planner.analysis.harvest_window import HarvestWindow

WINDOW = HarvestWindow(
    harvest_start=date(2026, 11, 1),
    peak_start=date(2026, 11, 24),
    peak_end=date(2027, 1, 8),
    harvest_end=date(2027, 1, 31),
    confidence=0.85,
)


class TestClassify:
    """Every day maps to exactly one status."""

    @pytest.mark.parametrize(
        ("today", "expected"),
        [
            (date(2026, 9, 1), HarvestStatus.PRE_SEASON),
            (date(2026, 10, 11), HarvestStatus.APPROACHING),
            (date(2026, 10, 31), HarvestStatus.APPROACHING),
            (date(2026, 11, 1), HarvestStatus.IN_SEASON),
            (date(2026, 11, 23), HarvestStatus.IN_SEASON),
            (date(2026, 11, 24), HarvestStatus.AT_PEAK),
            (date(2026, 12, 15), HarvestStatus.AT_PEAK),
            (date(2027, 1, 8), HarvestStatus.AT_PEAK),
            (date(2027, 1, 9), HarvestStatus.PAST_PEAK),
            (date(2027, 1, 31), HarvestStatus.PAST_PEAK),
            (date(2027, 2, 1), HarvestStatus.ENDED),
        ],
    )
    def test_boundaries(self, today: date, expected: HarvestStatus) -> None:
        assert classify(WINDOW, today).status == expected

    def test_approaching_cutoff_inclusive(self) -> None:
        assert classify(WINDOW, date(2026, 10, 11)).days_until == 21
        assert classify(WINDOW, date(2026, 10, 10)).status == HarvestStatus.PRE_SEASON

    def test_custom_cutoff(self) -> None:
        result = classify(WINDOW, date(2026, 10, 1), approaching_days=45)
        assert result.status == HarvestStatus.APPROACHING

    def test_days_until_only_before_harvest(self) -> None:
        assert classify(WINDOW, date(2026, 10, 20)).days_until == 12
        assert classify(WINDOW, date(2026, 12, 15)).days_until is None

    def test_collapsed_bounds_prefer_earlier_state(self) -> None:
        day = date(2026, 7, 1)
        window = HarvestWindow(day, day, day, day, 0.5)
        assert classify(window, day).status == HarvestStatus.AT_PEAK
        assert classify(window, day - timedelta(days=1)).status == HarvestStatus.APPROACHING

    def test_indeterminate_window(self) -> None:
        today = date(2026, 1, 10)
        far = today + timedelta(days=365)
        window = HarvestWindow(far, far, far, far, 0.1, indeterminate=True)
        result = classify(window, today)
        assert result.status == HarvestStatus.PRE_SEASON
        assert result.days_until is None
        assert "uncertain" in result.message


class TestMessages:
    def test_approaching_plural(self) -> None:
        assert classify(WINDOW, date(2026, 10, 20)).message == "Harvest begins in 12 days"

    def test_approaching_singular(self) -> None:
        assert classify(WINDOW, date(2026, 10, 31)).message == "Harvest begins in 1 day"

    def test_pre_season(self) -> None:
        assert classify(WINDOW, date(2026, 9, 1)).message == "Next harvest expected Nov 1"

    def test_in_season(self) -> None:
        assert classify(WINDOW, date(2026, 11, 5)).message == "In season; peak begins Nov 24"

    def test_at_peak(self) -> None:
        assert classify(WINDOW, date(2026, 12, 15)).message == "Peak quality now through Jan 8"

    def test_past_peak(self) -> None:
        assert classify(WINDOW, date(2027, 1, 20)).message == "Past peak; available through Jan 31"

    def test_ended(self) -> None:
        assert classify(WINDOW, date(2027, 3, 1)).message == "Season ended Jan 31"

    def test_format_day_no_padding(self) -> None:
        assert format_day(date(2026, 7, 4)) == "Jul 4"


class TestDiscoveryStatus:
    @pytest.mark.parametrize(
        ("full", "collapsed"),
        [
            (HarvestStatus.PRE_SEASON, HarvestStatus.OFF_SEASON),
            (HarvestStatus.APPROACHING, HarvestStatus.APPROACHING),
            (HarvestStatus.IN_SEASON, HarvestStatus.IN_SEASON),
            (HarvestStatus.AT_PEAK, HarvestStatus.AT_PEAK),
            (HarvestStatus.PAST_PEAK, HarvestStatus.IN_SEASON),
            (HarvestStatus.ENDED, HarvestStatus.OFF_SEASON),
        ],
    )
    def test_collapse(self, full: HarvestStatus, collapsed: HarvestStatus) -> None:
        assert to_discovery_status(full) == collapsed

    def test_always_a_discovery_status(self) -> None:
        day = date(2026, 9, 1)
        while day < date(2027, 3, 1):
            assert classify_for_discovery(WINDOW, day).status in DISCOVERY_STATUSES
            day += timedelta(days=1)

    def test_message_and_phase_kept(self) -> None:
        result = classify_for_discovery(WINDOW, date(2027, 1, 20))
        assert result.status == HarvestStatus.IN_SEASON
        assert result.phase == HarvestStatus.PAST_PEAK
        assert result.message.startswith("Past peak")
