"""Pure GDD computation functions (no I/O).

Formula (simple average method):

    GDD_daily = max(0, (T_max + T_min) / 2 - base_temp)

The projection rate is a simple moving average of the last N daily values,
so the same observation series always yields the same rate.
"""

from __future__ import annotations

import statistics
from datetime import date

from harvest_planner.datasources.gdd.models import (
    DEFAULT_BASE_TEMP_F,
    DEFAULT_TRAILING_DAYS,
    DailyGDD,
    GddAccumulation,
)


def compute_daily_gdd(
    tmax_f: float,
    tmin_f: float,
    base_temp_f: float = DEFAULT_BASE_TEMP_F,
) -> float:
    """Compute GDD for a single day using the simple average method.

    Args:
        tmax_f: Daily maximum temperature in Fahrenheit.
        tmin_f: Daily minimum temperature in Fahrenheit.
        base_temp_f: Base development temperature (default 50 F).

    Returns:
        Growing degree days for the day (>= 0).
    """
    avg = (tmax_f + tmin_f) / 2
    return max(0.0, avg - base_temp_f)


def compute_accumulated_gdd(
    daily_temps: list[tuple[date, float, float]],
    base_temp_f: float = DEFAULT_BASE_TEMP_F,
) -> list[DailyGDD]:
    """Compute daily and accumulated GDD from a sequence of (date, tmax, tmin).

    Args:
        daily_temps: List of (date, tmax_f, tmin_f) tuples, ordered by date.
        base_temp_f: Base development temperature in Fahrenheit.

    Returns:
        List of DailyGDD entries with running accumulation.
    """
    results: list[DailyGDD] = []
    accumulated = 0.0
    for dt, tmax, tmin in daily_temps:
        gdd = compute_daily_gdd(tmax, tmin, base_temp_f)
        accumulated += gdd
        results.append(
            DailyGDD(date=dt, tmax_f=tmax, tmin_f=tmin, gdd=gdd, accumulated=accumulated)
        )
    return results


def trailing_average(values: list[float], window_days: int = DEFAULT_TRAILING_DAYS) -> float:
    """Mean of the last ``window_days`` values (0.0 for an empty series)."""
    recent = values[-window_days:] if window_days > 0 else []
    if not recent:
        return 0.0
    return statistics.fmean(recent)


def trailing_stddev(values: list[float], window_days: int = DEFAULT_TRAILING_DAYS) -> float:
    """Population standard deviation of the last ``window_days`` values."""
    recent = values[-window_days:] if window_days > 0 else []
    if len(recent) < 2:
        return 0.0
    return statistics.pstdev(recent)


def summarize_accumulation(
    region_id: str,
    reference_date: date,
    daily_temps: list[tuple[date, float, float]],
    base_temp_f: float = DEFAULT_BASE_TEMP_F,
    window_days: int = DEFAULT_TRAILING_DAYS,
) -> GddAccumulation:
    """Reduce a temperature series to a ``GddAccumulation``.

    Args:
        region_id: Region the observations belong to.
        reference_date: First day of the accumulation cycle.
        daily_temps: (date, tmax_f, tmin_f) tuples ordered by date.
        base_temp_f: Base temperature for this accumulation.
        window_days: Trailing window for the projection rate.

    Returns:
        Accumulation with total, trailing rate, rate spread and history.
    """
    daily = compute_accumulated_gdd(daily_temps, base_temp_f)
    gdd_values = [d.gdd for d in daily]
    return GddAccumulation(
        region_id=region_id,
        base_temp=base_temp_f,
        reference_date=reference_date,
        total_gdd=daily[-1].accumulated if daily else 0.0,
        avg_daily_gdd=trailing_average(gdd_values, window_days),
        daily_stddev=trailing_stddev(gdd_values, window_days),
        days_observed=len(daily),
        through=daily[-1].date if daily else None,
        history=[(d.date, d.accumulated) for d in daily],
    )
