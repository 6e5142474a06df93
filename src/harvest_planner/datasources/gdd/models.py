"""GDD data models and constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

# Default base temperature for warm-season crops and citrus quality
DEFAULT_BASE_TEMP_F = 50.0

# Trailing window for the projection rate
DEFAULT_TRAILING_DAYS = 14


@dataclass
class DailyGDD:
    """GDD computation result for a single day."""

    date: date
    tmax_f: float
    tmin_f: float
    gdd: float
    accumulated: float


@dataclass
class GddAccumulation:
    """Accumulated heat for one (region, reference date, base temperature).

    ``total_gdd`` is the sum since the reference date; ``avg_daily_gdd`` is
    the trailing-window rate used to project forward.
    """

    region_id: str
    base_temp: float
    reference_date: date
    total_gdd: float = 0.0
    avg_daily_gdd: float = 0.0
    daily_stddev: float = 0.0
    days_observed: int = 0
    through: date | None = None
    history: list[tuple[date, float]] = field(default_factory=list)

    @property
    def rate_cv(self) -> float:
        """Coefficient of variation of the trailing daily rate (0 when flat)."""
        if self.avg_daily_gdd <= 0:
            return 0.0
        return self.daily_stddev / self.avg_daily_gdd

    def date_reached(self, threshold: float) -> date | None:
        """Return the first observed date the accumulation met ``threshold``.

        Args:
            threshold: Accumulated GDD to look for.

        Returns:
            The crossing date, or None if not reached or no history is kept.
        """
        for day, accumulated in self.history:
            if accumulated >= threshold:
                return day
        return None


class AccumulationProvider(Protocol):
    """Anything that can supply GDD accumulations for a region."""

    def get_gdd_accumulation(
        self, region_id: str, reference_date: date, base_temp: float
    ) -> GddAccumulation: ...

    def get_region_accumulations(
        self, region_id: str, reference_date: date, base_temps: list[float]
    ) -> dict[float, GddAccumulation]: ...
