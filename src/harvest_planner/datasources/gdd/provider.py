"""Region-level GDD accumulation backed by the Open-Meteo archive.

Maps a region id to its centroid, fetches the temperature series once, and
reduces it to one accumulation per requested base temperature. Every failure
mode (unknown region, network error, timeout, malformed or empty series)
surfaces as ``DataUnavailable`` so callers can skip the region.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING

import requests

from harvest_planner.datasources.gdd.client import fetch_temperature_data
from harvest_planner.datasources.gdd.compute import summarize_accumulation
from harvest_planner.datasources.gdd.models import DEFAULT_TRAILING_DAYS, GddAccumulation
from harvest_planner.errors import DataUnavailable

if TYPE_CHECKING:
    from collections.abc import Callable

    from harvest_planner.reference.catalog import Catalog

logger = logging.getLogger(__name__)


class OpenMeteoAccumulationProvider:
    """Weather accumulation provider for catalog regions."""

    def __init__(
        self,
        catalog: Catalog,
        *,
        window_days: int = DEFAULT_TRAILING_DAYS,
        timeout: float | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.catalog = catalog
        self.window_days = window_days
        self.timeout = timeout
        self._today = today

    def get_gdd_accumulation(
        self, region_id: str, reference_date: date, base_temp: float
    ) -> GddAccumulation:
        """Return the accumulation for a single base temperature.

        Raises:
            DataUnavailable: If the region has no usable weather data.
        """
        return self.get_region_accumulations(region_id, reference_date, [base_temp])[base_temp]

    def get_region_accumulations(
        self, region_id: str, reference_date: date, base_temps: list[float]
    ) -> dict[float, GddAccumulation]:
        """Fetch a region's temperatures once and accumulate for each base temperature.

        Observations run from ``reference_date`` through yesterday.

        Args:
            region_id: Catalog region id.
            reference_date: First day of the accumulation cycle.
            base_temps: Base temperatures to accumulate against.

        Returns:
            Mapping of base temperature to accumulation.

        Raises:
            DataUnavailable: Unknown region, fetch failure or timeout, or no
                observations in a non-empty date range.
        """
        region = self.catalog.regions.get(region_id)
        if region is None:
            raise DataUnavailable(region_id, "unknown region")

        through = self._today() - timedelta(days=1)
        if through < reference_date:
            temps: list[tuple[date, float, float]] = []
        else:
            try:
                temps = fetch_temperature_data(
                    region.latitude,
                    region.longitude,
                    reference_date,
                    through,
                    timeout=self.timeout,
                )
            except requests.Timeout as e:
                raise DataUnavailable(region_id, "weather request timed out") from e
            except requests.RequestException as e:
                raise DataUnavailable(region_id, f"weather request failed: {e}") from e
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                raise DataUnavailable(region_id, "malformed weather response") from e
            if not temps:
                raise DataUnavailable(region_id, "no observations returned")

        logger.debug(
            "Fetched %d days of temperatures for %s since %s", len(temps), region_id, reference_date
        )
        return {
            base: summarize_accumulation(region_id, reference_date, temps, base, self.window_days)
            for base in dict.fromkeys(base_temps)
        }
