"""
Discovery feed schemas.

Pydantic models for what the engine hands to clients. Field names are
snake_case in Python and camelCase on the wire (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from harvest_planner.analysis.harvest_status import HarvestStatus
from harvest_planner.analysis.seasons import Season

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Items
# =============================================================================


class DiscoveryItem(BaseModel):
    """One regional offering joined with its window, status and quality."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Offering id (cultivar_region)")
    offering_id: str
    variety_id: str
    product_id: str
    region_id: str

    status: HarvestStatus = Field(..., description="Discovery status")
    phase: HarvestStatus = Field(..., description="Full-model season phase")
    status_message: str
    harvest_start: date
    harvest_end: date
    optimal_start: date
    optimal_end: date
    days_until_start: int | None = None
    confidence: float = Field(..., ge=0, le=1)
    indeterminate: bool = False
    distance_miles: int | None = None

    category: str
    category_display_name: str
    subcategory: str
    model_type: str
    quality_tier: str | None = None
    product_display_name: str
    variety_display_name: str
    region_display_name: str
    state: str
    flavor_profile: str | None = None
    flavor_notes: str | None = None
    is_heritage: bool = False
    seasons: list[Season] = Field(default_factory=list)

    # Citrus only
    brix: float | None = None
    acidity: float | None = None
    brix_acid_ratio: float | None = None
    brim_a: float | None = None


# =============================================================================
# Queries
# =============================================================================


class DiscoveryFilters(BaseModel):
    """Optional narrowing of a discovery query."""

    model_config = _WIRE_CONFIG

    statuses: set[HarvestStatus] | None = None
    categories: set[str] | None = None
    max_distance_miles: float | None = Field(default=None, gt=0)
    season: Season | None = None


class DiscoveryResponse(BaseModel):
    """Bucketed discovery feed."""

    model_config = _WIRE_CONFIG

    at_peak: list[DiscoveryItem] = Field(default_factory=list)
    in_season: list[DiscoveryItem] = Field(default_factory=list)
    approaching: list[DiscoveryItem] = Field(default_factory=list)
    off_season: list[DiscoveryItem] = Field(default_factory=list)
    total_results: int = 0
    category_counts: dict[str, int] = Field(default_factory=dict)
    season_counts: dict[str, int] = Field(default_factory=dict)
    current_season: Season
    source: str = Field(..., description="'live' when just computed, 'cached' otherwise")
    timestamp: datetime
