"""Shared fixtures: a small catalog, a fake weather provider, a fixed clock."""

from __future__ import annotations

import threading
from datetime import UTC, date, datetime
from typing import Any

import pytest

from harvest_planner.datasources.gdd.models import GddAccumulation
from harvest_planner.errors import DataUnavailable
from harvest_planner.reference.catalog import (
    Catalog,
    ClimateSummary,
    Cultivar,
    ModelType,
    Product,
    Region,
    RegionalOffering,
    Thresholds,
)
from harvest_planner.schemas import DiscoveryItem

PRODUCTS = [
    Product("orange", "Orange", "fruit", "citrus"),
    Product("apple", "Apple", "fruit", "pome_fruit"),
    Product("tomato", "Tomato", "vegetable", "nightshade"),
    Product("orange_juice", "Orange Juice", "processed", "juice"),
]

CULTIVARS = [
    Cultivar(
        "navel_orange",
        "orange",
        "Washington Navel",
        ModelType.CALENDAR,
        Thresholds(peak_months=(11, 12, 1)),
    ),
    Cultivar(
        "honeycrisp", "apple", "Honeycrisp", ModelType.CALENDAR, Thresholds(peak_months=(9, 10))
    ),
    Cultivar(
        "brandywine",
        "tomato",
        "Brandywine",
        ModelType.GDD,
        Thresholds(base_temp=50, gdd_to_maturity=1600, gdd_to_peak=1800, gdd_window=400),
    ),
    Cultivar(
        "fresh_oj",
        "orange_juice",
        "Fresh-Squeezed OJ",
        ModelType.PARENT,
        parent_cultivar_id="navel_orange",
    ),
]

REGIONS = [
    Region("florida", "Indian River", "FL", 27.6, -80.4, ClimateSummary(45, 350, 305, "10")),
    Region("yakima", "Yakima Valley", "WA", 46.6, -120.5, ClimateSummary(120, 290, 170, "6")),
    Region("georgia", "Georgia Piedmont", "GA", 32.8, -83.6, ClimateSummary(90, 310, 220, "8")),
]

OFFERINGS = [
    RegionalOffering("navel_orange", "florida", quality_tier="exceptional"),
    RegionalOffering("honeycrisp", "yakima", quality_tier="exceptional"),
    RegionalOffering("brandywine", "georgia", quality_tier="excellent"),
    RegionalOffering("fresh_oj", "florida"),
]

# Mid-December afternoon, UTC
NOW = datetime(2026, 12, 15, 15, 0, tzinfo=UTC)


def make_catalog(
    offerings: list[RegionalOffering] | None = None,
    cultivars: list[Cultivar] | None = None,
) -> Catalog:
    return Catalog.from_records(
        PRODUCTS,
        CULTIVARS if cultivars is None else cultivars,
        REGIONS,
        OFFERINGS if offerings is None else offerings,
    )


def make_accumulation(
    total: float,
    avg: float,
    *,
    region_id: str = "georgia",
    base_temp: float = 50.0,
    stddev: float = 0.0,
    history: list[tuple[date, float]] | None = None,
) -> GddAccumulation:
    return GddAccumulation(
        region_id=region_id,
        base_temp=base_temp,
        reference_date=date(2026, 1, 1),
        total_gdd=total,
        avg_daily_gdd=avg,
        daily_stddev=stddev,
        days_observed=len(history or []),
        history=history or [],
    )



def make_item(offering_id: str = "brandywine_georgia", **overrides: Any) -> DiscoveryItem:
    """A minimal valid feed item for cache and store tests."""
    fields: dict[str, Any] = {
        "id": offering_id,
        "offering_id": offering_id,
        "variety_id": "brandywine",
        "product_id": "tomato",
        "region_id": "georgia",
        "status": "approaching",
        "phase": "approaching",
        "status_message": "Harvest begins in 12 days",
        "harvest_start": date(2026, 7, 1),
        "harvest_end": date(2026, 8, 1),
        "optimal_start": date(2026, 7, 10),
        "optimal_end": date(2026, 7, 20),
        "days_until_start": 12,
        "confidence": 0.8,
        "category": "vegetable",
        "category_display_name": "Vegetables",
        "subcategory": "nightshade",
        "model_type": "gdd",
        "product_display_name": "Tomato",
        "variety_display_name": "Brandywine",
        "region_display_name": "Georgia Piedmont",
        "state": "GA",
    }
    fields.update(overrides)
    return DiscoveryItem(**fields)


class FakeProvider:
    """In-memory provider: fixed totals per region, optional failing regions."""

    def __init__(
        self,
        totals: dict[str, tuple[float, float]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.totals = totals or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, date, list[float]]] = []
        self._lock = threading.Lock()

    def get_gdd_accumulation(
        self, region_id: str, reference_date: date, base_temp: float
    ) -> GddAccumulation:
        return self.get_region_accumulations(region_id, reference_date, [base_temp])[base_temp]

    def get_region_accumulations(
        self, region_id: str, reference_date: date, base_temps: list[float]
    ) -> dict[float, GddAccumulation]:
        with self._lock:
            self.calls.append((region_id, reference_date, list(base_temps)))
        if region_id in self.failing:
            raise DataUnavailable(region_id, "provider down")
        total, avg = self.totals.get(region_id, (0.0, 0.0))
        return {
            base: make_accumulation(total, avg, region_id=region_id, base_temp=base)
            for base in base_temps
        }


class FakeClock:
    """Settable clock for cache and service tests."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def catalog() -> Catalog:
    return make_catalog()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
