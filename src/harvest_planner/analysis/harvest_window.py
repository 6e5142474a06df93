"""Project resolved models onto concrete calendar dates.

GDD model: each threshold becomes a date by linear projection from today
using the trailing daily rate::

    days_ahead = ceil((threshold - total_gdd) / avg_daily_gdd)

Thresholds already passed are dated at the day the accumulation crossed
them (or today, if no daily history is available). A near-zero rate
(winter dormancy) leaves unreached thresholds unresolved and the window is
flagged ``indeterminate``. Before maturity they are parked a year out. Once
maturity has passed, a stalled crop is closed at the last observed day, so
it reads as ended rather than at peak until next year.

Calendar model: peak months are split into contiguous runs (wrapping
Dec -> Jan), each run placed in last/this/next year, and the earliest
occurrence that has not ended yet wins. The run's full month span is the
harvest window; its middle half is the peak window.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING

from harvest_planner.analysis.cultivar_model import CalendarModel, GddModel

if TYPE_CHECKING:
    from harvest_planner.analysis.cultivar_model import ResolvedModel
    from harvest_planner.datasources.gdd.models import GddAccumulation

# Below this rate (GDD/day) we do not project forward
MIN_DAILY_RATE = 0.5

# Horizon for unresolved or very distant thresholds
UNRESOLVED_DAYS = 365

# Confidence falls to 1/e this many days away from the window
CONFIDENCE_DECAY_DAYS = 120.0

GDD_BASE_CONFIDENCE = 0.9
CALENDAR_BASE_CONFIDENCE = 0.85
INDETERMINATE_CONFIDENCE = 0.1


@dataclass(frozen=True)
class HarvestWindow:
    """Projected harvest dates for one offering."""

    harvest_start: date
    peak_start: date
    peak_end: date
    harvest_end: date
    confidence: float
    indeterminate: bool = False

    def days_outside(self, today: date) -> int:
        """Days between ``today`` and the harvest window (0 when inside)."""
        if today < self.harvest_start:
            return (self.harvest_start - today).days
        if today > self.harvest_end:
            return (today - self.harvest_end).days
        return 0


def distance_confidence(base: float, days_away: int) -> float:
    """Decay ``base`` exponentially with distance from the window."""
    return base * math.exp(-max(0, days_away) / CONFIDENCE_DECAY_DAYS)


# =============================================================================
# GDD model
# =============================================================================


def _gdd_threshold_date(
    threshold: float, acc: GddAccumulation, today: date
) -> tuple[date, bool]:
    """Return (date, resolved) for one GDD threshold."""
    if acc.total_gdd >= threshold:
        return acc.date_reached(threshold) or today, True
    if acc.avg_daily_gdd < MIN_DAILY_RATE:
        return today + timedelta(days=UNRESOLVED_DAYS), False
    days_ahead = math.ceil((threshold - acc.total_gdd) / acc.avg_daily_gdd)
    if days_ahead > UNRESOLVED_DAYS:
        return today + timedelta(days=UNRESOLVED_DAYS), False
    return today + timedelta(days=max(0, days_ahead)), True


def _close_stalled(
    projected: list[tuple[date, bool]], acc: GddAccumulation, today: date
) -> list[tuple[date, bool]]:
    """End a started season that stopped accumulating at its last observed day."""
    yesterday = today - timedelta(days=1)
    last_observed = min(acc.through or yesterday, yesterday)
    return [
        (min(d, last_observed) if resolved else last_observed, resolved)
        for d, resolved in projected
    ]


def project_gdd(model: GddModel, acc: GddAccumulation, today: date) -> HarvestWindow:
    """Project a GDD model from the current accumulation.

    Args:
        model: Resolved GDD thresholds.
        acc: Accumulation to date for the model's base temperature.
        today: Projection origin.

    Returns:
        HarvestWindow with ordered dates and a confidence score.
    """
    thresholds = (model.maturity_gdd, model.peak_gdd, model.peak_end_gdd, model.harvest_end_gdd)
    projected = [_gdd_threshold_date(t, acc, today) for t in thresholds]
    indeterminate = not all(resolved for _, resolved in projected)
    if indeterminate and acc.total_gdd >= model.maturity_gdd:
        projected = _close_stalled(projected, acc, today)
    harvest_start, peak_start, peak_end, harvest_end = (d for d, _ in projected)

    window = HarvestWindow(harvest_start, peak_start, peak_end, harvest_end, 0.0, indeterminate)
    if indeterminate:
        confidence = INDETERMINATE_CONFIDENCE
    else:
        confidence = distance_confidence(GDD_BASE_CONFIDENCE, window.days_outside(today))
        confidence /= 1.0 + acc.rate_cv
    return _with_confidence(window, confidence)


# =============================================================================
# Calendar model
# =============================================================================


def month_runs(months: tuple[int, ...]) -> list[list[int]]:
    """Split peak months into contiguous runs, joining a Dec -> Jan wrap.

    >>> month_runs((11, 12, 1))
    [[11, 12, 1]]
    >>> month_runs((3, 4, 9))
    [[3, 4], [9]]
    """
    ordered = sorted(set(months))
    runs: list[list[int]] = []
    for m in ordered:
        if runs and m == runs[-1][-1] + 1:
            runs[-1].append(m)
        else:
            runs.append([m])
    if len(runs) > 1 and runs[0][0] == 1 and runs[-1][-1] == 12:
        runs[0] = runs.pop() + runs[0]
    return runs


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _place_run(run: list[int], start_year: int) -> tuple[date, date]:
    start = date(start_year, run[0], 1)
    end_year = start_year + 1 if run[-1] < run[0] else start_year
    return start, _month_end(end_year, run[-1])


def _peak_span(start: date, end: date) -> tuple[date, date]:
    span_days = (end - start).days + 1
    trim = timedelta(days=span_days // 4)
    return start + trim, end - trim


def project_calendar(model: CalendarModel, today: date) -> HarvestWindow:
    """Project a calendar model onto the nearest relevant occurrence.

    Args:
        model: Resolved peak months.
        today: Reference date.

    Returns:
        HarvestWindow for the current or next occurrence of the peak months.
    """
    if model.is_year_round:
        start, end = date(today.year, 1, 1), date(today.year, 12, 31)
        return HarvestWindow(start, start, end, end, round(CALENDAR_BASE_CONFIDENCE, 2))

    candidates = sorted(
        _place_run(run, year)
        for run in month_runs(model.peak_months)
        for year in (today.year - 1, today.year, today.year + 1)
    )
    start, end = next((s, e) for s, e in candidates if e >= today)
    peak_start, peak_end = _peak_span(start, end)

    window = HarvestWindow(start, peak_start, peak_end, end, 0.0)
    confidence = distance_confidence(CALENDAR_BASE_CONFIDENCE, window.days_outside(today))
    return _with_confidence(window, confidence)


# =============================================================================
# Dispatch
# =============================================================================


def _with_confidence(window: HarvestWindow, confidence: float) -> HarvestWindow:
    clamped = min(1.0, max(0.0, confidence))
    return HarvestWindow(
        window.harvest_start,
        window.peak_start,
        window.peak_end,
        window.harvest_end,
        round(clamped, 2),
        window.indeterminate,
    )


def project(
    model: ResolvedModel, accumulation: GddAccumulation | None, today: date
) -> HarvestWindow:
    """Project any resolved model.

    Raises:
        ValueError: If a GDD model is projected without an accumulation.
    """
    if isinstance(model, GddModel):
        if accumulation is None:
            msg = "GDD projection needs an accumulation"
            raise ValueError(msg)
        return project_gdd(model, accumulation, today)
    return project_calendar(model, today)
