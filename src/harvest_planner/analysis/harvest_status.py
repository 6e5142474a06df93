"""Classify a projected harvest window relative to today.

Full season model, in order::

    pre_season -> approaching -> in_season -> at_peak -> past_peak -> ended

The discovery feed collapses this to ``off_season | approaching | in_season |
at_peak``. Rules are checked earliest state first, so when bounds collapse
(e.g. maturity == peak) the earlier state wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from harvest_planner.analysis.harvest_window import HarvestWindow

APPROACHING_DAYS = 21


class HarvestStatus(StrEnum):
    """Where an offering is in its season."""

    PRE_SEASON = "pre_season"
    APPROACHING = "approaching"
    IN_SEASON = "in_season"
    AT_PEAK = "at_peak"
    PAST_PEAK = "past_peak"
    ENDED = "ended"
    # Discovery feed only
    OFF_SEASON = "off_season"


DISCOVERY_STATUSES = (
    HarvestStatus.AT_PEAK,
    HarvestStatus.IN_SEASON,
    HarvestStatus.APPROACHING,
    HarvestStatus.OFF_SEASON,
)


@dataclass(frozen=True)
class StatusResult:
    """A status, its display message, and days until harvest when pending.

    ``phase`` holds the full-model status when ``status`` has been collapsed
    for the discovery feed.
    """

    status: HarvestStatus
    message: str
    days_until: int | None = None
    phase: HarvestStatus | None = None


def format_day(d: date) -> str:
    """Short display date, e.g. ``Nov 24``."""
    return f"{d:%b} {d.day}"


def classify(
    window: HarvestWindow, today: date, approaching_days: int = APPROACHING_DAYS
) -> StatusResult:
    """Assign exactly one full-model status to ``today``.

    Args:
        window: Projected harvest window.
        today: Date to classify.
        approaching_days: Cutoff for ``approaching`` (inclusive).

    Returns:
        StatusResult; ``days_until`` is set whenever harvest has not started.
    """
    if today < window.harvest_start:
        if window.indeterminate:
            return StatusResult(
                HarvestStatus.PRE_SEASON,
                "Harvest timing uncertain; little heat accumulating yet",
            )
        days = (window.harvest_start - today).days
        if days <= approaching_days:
            unit = "day" if days == 1 else "days"
            return StatusResult(HarvestStatus.APPROACHING, f"Harvest begins in {days} {unit}", days)
        return StatusResult(
            HarvestStatus.PRE_SEASON,
            f"Next harvest expected {format_day(window.harvest_start)}",
            days,
        )
    if today < window.peak_start:
        return StatusResult(
            HarvestStatus.IN_SEASON, f"In season; peak begins {format_day(window.peak_start)}"
        )
    if today <= window.peak_end:
        return StatusResult(
            HarvestStatus.AT_PEAK, f"Peak quality now through {format_day(window.peak_end)}"
        )
    if today <= window.harvest_end:
        return StatusResult(
            HarvestStatus.PAST_PEAK,
            f"Past peak; available through {format_day(window.harvest_end)}",
        )
    return StatusResult(HarvestStatus.ENDED, f"Season ended {format_day(window.harvest_end)}")


def to_discovery_status(status: HarvestStatus) -> HarvestStatus:
    """Collapse a full-model status to the discovery feed's four values."""
    if status in (HarvestStatus.PRE_SEASON, HarvestStatus.ENDED):
        return HarvestStatus.OFF_SEASON
    if status == HarvestStatus.PAST_PEAK:
        return HarvestStatus.IN_SEASON
    return status


def classify_for_discovery(
    window: HarvestWindow, today: date, approaching_days: int = APPROACHING_DAYS
) -> StatusResult:
    """``classify`` then collapse to the discovery status set.

    The message and ``days_until`` are kept; the full-model status moves to
    ``phase``.
    """
    result = classify(window, today, approaching_days)
    return StatusResult(
        to_discovery_status(result.status), result.message, result.days_until, result.status
    )
