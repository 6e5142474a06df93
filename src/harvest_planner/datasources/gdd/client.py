"""Daily temperature fetching from the Open-Meteo archive API."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests  # noqa: TC002

from harvest_planner.services.http import NO_TIMEOUT_RETRY, create_session

logger = logging.getLogger(__name__)

# Open-Meteo archive endpoint for historical daily temperatures
ARCHIVE_API = "https://archive-api.open-meteo.com/v1/archive"

WEATHER_TIMEOUT = 20  # seconds

#: Weather fetches sit on the discovery path: read timeouts are not retried.
weather_session: requests.Session = create_session(
    retry=NO_TIMEOUT_RETRY, timeout=WEATHER_TIMEOUT
)


def fetch_temperature_data(
    lat: float,
    lon: float,
    start: date,
    end: date,
    timezone: str = "auto",
    timeout: float | None = None,
) -> list[tuple[date, float, float]]:
    """Fetch daily min/max temperatures from the Open-Meteo archive API.

    Days where either value is missing are skipped rather than zero-filled.

    Args:
        lat: Latitude of the location.
        lon: Longitude of the location.
        start: Start date (inclusive).
        end: End date (inclusive).
        timezone: Timezone for day boundaries ("auto" uses the location's).
        timeout: Per-request timeout override in seconds.

    Returns:
        List of (date, tmax_f, tmin_f) tuples, ordered by date.

    Raises:
        requests.RequestException: If the API request fails or times out.
    """
    params: dict[str, str | float] = {
        "latitude": lat,
        "longitude": lon,
        "start_date": start.isoformat(),
        "end_date": end.isoformat(),
        "daily": "temperature_2m_max,temperature_2m_min",
        "temperature_unit": "fahrenheit",
        "timezone": timezone,
    }
    kwargs: dict[str, Any] = {"params": params}
    if timeout is not None:
        kwargs["timeout"] = timeout

    resp = weather_session.get(ARCHIVE_API, **kwargs)
    resp.raise_for_status()
    data = resp.json()

    daily = data.get("daily", {})
    dates = daily.get("time", [])
    tmax_values = daily.get("temperature_2m_max", [])
    tmin_values = daily.get("temperature_2m_min", [])

    results: list[tuple[date, float, float]] = []
    skipped = 0
    for i, date_str in enumerate(dates):
        tmax = tmax_values[i] if i < len(tmax_values) else None
        tmin = tmin_values[i] if i < len(tmin_values) else None
        if tmax is None or tmin is None:
            skipped += 1
            continue
        results.append((date.fromisoformat(date_str), float(tmax), float(tmin)))

    if skipped:
        logger.debug("Skipped %d days with missing temperatures at (%s, %s)", skipped, lat, lon)
    return results
