"""Catalog data model: products, cultivars, regions and regional offerings.

Hierarchy::

    Product (Apple) -> Cultivar (Honeycrisp) -> RegionalOffering (Honeycrisp from Yakima)

The catalog is read-only reference data, loaded once per process. All model
parameters live here, so new regions and cultivars need no code changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from functools import lru_cache


class ModelType(StrEnum):
    """How a cultivar's harvest timing is predicted."""

    GDD = "gdd"
    CALENDAR = "calendar"
    PARENT = "parent"


@dataclass(frozen=True)
class Thresholds:
    """Prediction thresholds. Used both for cultivar defaults and offering overrides.

    Any field may be ``None``; which ones are required depends on the model type.
    """

    base_temp: float | None = None
    gdd_to_maturity: float | None = None
    gdd_to_peak: float | None = None
    gdd_window: float | None = None
    peak_months: tuple[int, ...] | None = None


@dataclass(frozen=True)
class Product:
    """A botanical or product base type, e.g. "Apple"."""

    id: str
    display_name: str
    category: str
    subcategory: str
    description: str = ""


@dataclass(frozen=True)
class Cultivar:
    """A specific genetic selection (or derived product) of a Product."""

    id: str
    product_id: str
    display_name: str
    model_type: ModelType
    defaults: Thresholds = field(default_factory=Thresholds)
    parent_cultivar_id: str | None = None
    flavor_profile: str | None = None
    is_heritage: bool = False


@dataclass(frozen=True)
class ClimateSummary:
    """Frost dates (day-of-year) and hardiness zone for a region."""

    avg_last_frost_doy: int
    avg_first_frost_doy: int
    frost_free_days: int
    usda_zone: str


@dataclass(frozen=True)
class Region:
    """A named growing area with a geographic centroid."""

    id: str
    display_name: str
    state: str
    latitude: float
    longitude: float
    climate: ClimateSummary


@dataclass(frozen=True)
class RegionalOffering:
    """A cultivar grown in a region: the unit the engine predicts on."""

    cultivar_id: str
    region_id: str
    is_active: bool = True
    quality_tier: str | None = None
    overrides: Thresholds = field(default_factory=Thresholds)
    flavor_notes: str | None = None

    @property
    def id(self) -> str:
        """Stable identifier, unique per (cultivar, region)."""
        return f"{self.cultivar_id}_{self.region_id}"


@dataclass
class Catalog:
    """Indexed, read-only view over the reference data."""

    products: dict[str, Product]
    cultivars: dict[str, Cultivar]
    regions: dict[str, Region]
    offerings: dict[str, RegionalOffering]

    @classmethod
    def from_records(
        cls,
        products: list[Product],
        cultivars: list[Cultivar],
        regions: list[Region],
        offerings: list[RegionalOffering],
    ) -> Catalog:
        """Build a catalog from flat record lists.

        Raises:
            ValueError: If two offerings share the same (cultivar, region) pair.
        """
        by_id: dict[str, RegionalOffering] = {}
        for offering in offerings:
            if offering.id in by_id:
                msg = f"Duplicate regional offering: {offering.id}"
                raise ValueError(msg)
            by_id[offering.id] = offering
        return cls(
            products={p.id: p for p in products},
            cultivars={c.id: c for c in cultivars},
            regions={r.id: r for r in regions},
            offerings=by_id,
        )

    def active_offerings(self) -> list[RegionalOffering]:
        """All offerings currently tracked, in catalog order."""
        return [o for o in self.offerings.values() if o.is_active]

    def product_for(self, cultivar_id: str) -> Product | None:
        """Look up the product a cultivar belongs to."""
        cultivar = self.cultivars.get(cultivar_id)
        if cultivar is None:
            return None
        return self.products.get(cultivar.product_id)


@lru_cache
def default_catalog() -> Catalog:
    """The built-in catalog from ``reference.products`` and ``reference.regions``."""
    from harvest_planner.reference.products import CULTIVARS, PRODUCTS, REGIONAL_OFFERINGS
    from harvest_planner.reference.regions import GROWING_REGIONS

    return Catalog.from_records(PRODUCTS, CULTIVARS, GROWING_REGIONS, REGIONAL_OFFERINGS)
