"""Month -> meteorological season helpers."""

from __future__ import annotations

from datetime import date
from enum import StrEnum


class Season(StrEnum):
    WINTER = "winter"
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"


SEASON_ORDER = (Season.WINTER, Season.SPRING, Season.SUMMER, Season.FALL)

_MONTH_SEASON = {
    12: Season.WINTER, 1: Season.WINTER, 2: Season.WINTER,
    3: Season.SPRING, 4: Season.SPRING, 5: Season.SPRING,
    6: Season.SUMMER, 7: Season.SUMMER, 8: Season.SUMMER,
    9: Season.FALL, 10: Season.FALL, 11: Season.FALL,
}  # fmt: skip


def season_for_month(month: int) -> Season:
    return _MONTH_SEASON[month]


def current_season(today: date) -> Season:
    return season_for_month(today.month)


def months_between(start: date, end: date) -> list[int]:
    """Calendar months touched by ``[start, end]``, in order, at most 12."""
    months: list[int] = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month) and len(months) < 12:
        months.append(month)
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)
    return months


def seasons_for_months(months: list[int] | tuple[int, ...]) -> list[Season]:
    """Distinct seasons covered by ``months``, in winter..fall order."""
    covered = {season_for_month(m) for m in months}
    return [s for s in SEASON_ORDER if s in covered]
