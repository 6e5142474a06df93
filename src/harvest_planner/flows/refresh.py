"""
Prefect flow that refreshes the prediction snapshot.

Fetches each region's temperatures concurrently (one task per region),
builds the full prediction set, and writes it to ``live/predictions.json``
so discovery queries in other processes can serve it from cache.

Run locally:
    python -m harvest_planner.flows.refresh

Run with Prefect dashboard:
    prefect server start &
    python -m harvest_planner.flows.refresh
"""

from __future__ import annotations

from datetime import date, timedelta
from functools import partial
from pathlib import Path
from typing import Any

from prefect import flow, task

from harvest_planner.config import get_settings
from harvest_planner.datasources.gdd import (
    OpenMeteoAccumulationProvider,
    accumulation_from_dict,
    accumulation_to_dict,
)
from harvest_planner.discovery import (
    DiscoveryService,
    WeatherResults,
    local_today,
    reference_date_for,
)
from harvest_planner.errors import DataUnavailable
from harvest_planner.reference.catalog import default_catalog
from harvest_planner.store import (
    ACCUMULATIONS_PATH,
    PREDICTIONS_PATH,
    DataStore,
    PredictionCache,
    utc_now,
)

# Data store with tiered directories
store = DataStore(Path(get_settings().data_dir))

# Archive data only changes once a day
ACCUMULATIONS_TTL = timedelta(hours=6)


def _provider() -> OpenMeteoAccumulationProvider:
    settings = get_settings()
    return OpenMeteoAccumulationProvider(
        default_catalog(),
        window_days=settings.trailing_window_days,
        timeout=settings.weather_timeout_seconds,
        today=partial(local_today, settings.timezone),
    )


@task(name="fetch-region-accumulations")
def fetch_region_accumulations(
    region_id: str, reference_date: str, base_temps: list[float]
) -> dict[str, Any]:
    """Fetch one region's temperatures and accumulate per base temperature.

    Not retried: a failed or timed-out region is reported and picked up on
    the next refresh.

    Returns:
        Dict with ``region_id`` and either ``accumulations`` or ``error``.
    """
    try:
        by_base = _provider().get_region_accumulations(
            region_id, date.fromisoformat(reference_date), base_temps
        )
    except DataUnavailable as e:
        return {"region_id": region_id, "error": e.reason}
    except Exception as e:
        print(f"Weather fetch crashed for {region_id}: {e!r}")
        return {"region_id": region_id, "error": f"provider error: {e}"}
    return {
        "region_id": region_id,
        "accumulations": [accumulation_to_dict(acc) for acc in by_base.values()],
    }


@task(name="save-accumulations")
def save_accumulations(payloads: list[dict[str, Any]], reference_date: str) -> Path:
    """Save per-region accumulations via store."""
    return store.write(
        ACCUMULATIONS_PATH,
        {"reference_date": reference_date, "regions": payloads},
        source="open-meteo.com (archive)",
        valid_until=utc_now() + ACCUMULATIONS_TTL,
    )


def weather_from_payloads(payloads: list[dict[str, Any]]) -> WeatherResults:
    """Rebuild joined weather results from task/store payloads."""
    results = WeatherResults()
    for payload in payloads:
        region_id = payload["region_id"]
        if "error" in payload:
            results.failures[region_id] = DataUnavailable(region_id, payload["error"])
            continue
        results.accumulations[region_id] = {
            acc.base_temp: acc
            for acc in (accumulation_from_dict(d) for d in payload.get("accumulations", []))
        }
    return results


def _cached_payloads(reference_date: str) -> list[dict[str, Any]] | None:
    if not store.is_fresh(ACCUMULATIONS_PATH):
        return None
    cached = store.read(ACCUMULATIONS_PATH) or {}
    if cached.get("reference_date") != reference_date:
        return None
    return cached.get("regions", [])


@flow(name="refresh-predictions", log_prints=True)
def refresh_predictions(force: bool = False) -> dict[str, Any]:
    """
    Rebuild the prediction snapshot.

    Skips everything while the current snapshot is fresh (unless ``force``).
    Reuses stored accumulations while they are fresh and for the same cycle.
    """
    settings = get_settings()
    cache = PredictionCache(ttl=timedelta(minutes=settings.cache_ttl_minutes), store=store)
    cached = None if force else cache.get()
    if cached is not None:
        print("Predictions are fresh, skipping refresh.")
        return {"skipped": True, "predictions": len(cached)}

    service = DiscoveryService(
        default_catalog(),
        _provider(),
        cache,
        approaching_days=settings.approaching_days,
        max_workers=settings.max_workers,
        timezone=settings.timezone,
    )

    today = service.today()
    reference_date = reference_date_for(today).isoformat()
    offerings = service.catalog.active_offerings()
    resolved, dropped = service.resolve_offerings(offerings)
    if dropped:
        print(f"Dropped {dropped} offerings with catalog errors (see warnings).")

    plan = service.weather_plan(resolved)
    payloads = None if force else _cached_payloads(reference_date)
    if payloads is not None:
        print("Accumulations are fresh, skipping weather fetch.")
    else:
        print(f"Fetching weather for {len(plan)} regions since {reference_date}...")
        futures = [
            fetch_region_accumulations.submit(region_id, reference_date, bases)
            for region_id, bases in plan.items()
        ]
        payloads = [future.result() for future in futures]
        save_accumulations(payloads, reference_date)

    weather = weather_from_payloads(payloads)
    for region_id, error in weather.failures.items():
        print(f"Weather unavailable for {region_id}: {error.reason}")

    items = service.build_items(resolved, weather, today, attempted=len(offerings))
    cache.put(items)
    print(f"Saved {len(items)} predictions to {store.base / PREDICTIONS_PATH}")

    return {
        "skipped": False,
        "predictions": len(items),
        "dropped": len(offerings) - len(items),
        "regions_fetched": len(weather.accumulations),
        "regions_failed": len(weather.failures),
    }


if __name__ == "__main__":
    result = refresh_predictions()
    print(f"Flow complete: {result}")
