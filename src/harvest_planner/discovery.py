"""Discovery aggregator: every active offering -> a sorted, bucketed feed.

Pipeline per prediction run::

    resolve offerings -> plan one weather fetch per region -> fetch concurrently
        -> project window -> classify -> citrus quality -> DiscoveryItem

The resulting item list is distance-independent and cached per hour bucket.
Each ``discover`` call then attaches caller distance, filters, buckets and
sorts, which is cheap and always recomputed.

Per-offering failures (no weather, incomplete model, broken parent chain) are
logged and dropped. Only when every active offering fails does the caller see
an error (``NoPredictionsAvailable``).
"""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from harvest_planner.analysis.cultivar_model import GddModel, ThresholdResolver
from harvest_planner.analysis.harvest_status import (
    APPROACHING_DAYS,
    HarvestStatus,
    classify_for_discovery,
)
from harvest_planner.analysis.harvest_window import project
from harvest_planner.analysis.seasons import current_season, months_between, seasons_for_months
from harvest_planner.analysis.sugar_acid import estimate_sugar_acid, is_citrus
from harvest_planner.datasources.gdd.models import DEFAULT_BASE_TEMP_F
from harvest_planner.errors import (
    DataUnavailable,
    IncompleteModel,
    InvalidCultivarChain,
    NoPredictionsAvailable,
    PredictionError,
)
from harvest_planner.reference.geography import distance_miles
from harvest_planner.reference.products import CATEGORY_DISPLAY_NAMES
from harvest_planner.schemas import DiscoveryFilters, DiscoveryItem, DiscoveryResponse
from harvest_planner.store import utc_now

if TYPE_CHECKING:
    from collections.abc import Callable

    from harvest_planner.analysis.cultivar_model import ResolvedThresholds
    from harvest_planner.datasources.gdd.models import AccumulationProvider, GddAccumulation
    from harvest_planner.reference.catalog import Catalog, RegionalOffering
    from harvest_planner.store import PredictionCache

logger = logging.getLogger(__name__)

RegionAccumulations = dict[float, "GddAccumulation"]

SKIPPABLE_ERRORS = (DataUnavailable, IncompleteModel, InvalidCultivarChain)


@dataclass
class WeatherResults:
    """Joined output of the per-region weather fan-out."""

    accumulations: dict[str, RegionAccumulations] = field(default_factory=dict)
    failures: dict[str, DataUnavailable] = field(default_factory=dict)

    def get(self, region_id: str, base_temp: float) -> GddAccumulation:
        """Accumulation for a region and base temperature.

        Raises:
            DataUnavailable: If the region's fetch failed or was never planned.
        """
        if region_id in self.failures:
            raise self.failures[region_id]
        by_base = self.accumulations.get(region_id)
        if by_base is None or base_temp not in by_base:
            raise DataUnavailable(region_id, f"no accumulation for base {base_temp:g}F")
        return by_base[base_temp]


@dataclass(frozen=True)
class ResolvedOffering:
    offering: RegionalOffering
    resolved: ResolvedThresholds


def log_skip(offering: RegionalOffering, error: PredictionError) -> None:
    """Log a dropped offering with enough context to fix the catalog or feed."""
    logger.warning(
        "Skipping offering %s (cultivar=%s region=%s): %s",
        offering.id,
        offering.cultivar_id,
        offering.region_id,
        error,
    )


class DiscoveryService:
    """Builds, caches and serves the discovery feed."""

    def __init__(
        self,
        catalog: Catalog,
        provider: AccumulationProvider,
        cache: PredictionCache,
        *,
        approaching_days: int = APPROACHING_DAYS,
        max_workers: int = 8,
        clock: Callable[[], datetime] = utc_now,
        timezone: str = "UTC",
    ) -> None:
        self.catalog = catalog
        self.provider = provider
        self.cache = cache
        self.approaching_days = approaching_days
        self.max_workers = max_workers
        self.clock = clock
        self.tz = ZoneInfo(timezone)
        self.resolver = ThresholdResolver(catalog)

    def today(self) -> date:
        """Local calendar date according to the injected clock."""
        return local_today(self.tz, self.clock)

    # -------------------------------------------------------------------------
    # Prediction set
    # -------------------------------------------------------------------------

    def resolve_offerings(
        self, offerings: list[RegionalOffering] | None = None
    ) -> tuple[list[ResolvedOffering], int]:
        """Resolve active offerings, dropping ones with catalog errors.

        Returns:
            (resolved offerings, number dropped)
        """
        resolved: list[ResolvedOffering] = []
        dropped = 0
        for offering in self.catalog.active_offerings() if offerings is None else offerings:
            try:
                resolved.append(ResolvedOffering(offering, self.resolver.resolve(offering)))
            except (IncompleteModel, InvalidCultivarChain) as e:
                log_skip(offering, e)
                dropped += 1
        return resolved, dropped

    def weather_plan(self, resolved: list[ResolvedOffering]) -> dict[str, list[float]]:
        """Distinct base temperatures needed per region.

        GDD offerings need their own base temperature; citrus offerings need
        the default base for the quality estimate. Regions needing neither
        are not fetched.
        """
        plan: dict[str, set[float]] = {}
        for item in resolved:
            region_id = item.offering.region_id
            model = item.resolved.model
            if isinstance(model, GddModel):
                plan.setdefault(region_id, set()).add(model.base_temp)
            if is_citrus(self.catalog.product_for(item.offering.cultivar_id)):
                plan.setdefault(region_id, set()).add(DEFAULT_BASE_TEMP_F)
        return {region_id: sorted(bases) for region_id, bases in plan.items()}

    def fetch_weather(self, plan: dict[str, list[float]], reference_date: date) -> WeatherResults:
        """Fan out one provider call per region on a thread pool and join."""
        results = WeatherResults()
        if not plan:
            return results

        workers = max(1, min(self.max_workers, len(plan)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(
                    self.provider.get_region_accumulations, region_id, reference_date, bases
                ): region_id
                for region_id, bases in plan.items()
            }
            for future in as_completed(futures):
                region_id = futures[future]
                try:
                    results.accumulations[region_id] = future.result()
                except DataUnavailable as e:
                    logger.warning("Weather unavailable for %s: %s", region_id, e.reason)
                    results.failures[region_id] = e
                except Exception as e:
                    logger.exception("Weather fetch crashed for %s", region_id)
                    reason = f"provider error: {e}"
                    results.failures[region_id] = DataUnavailable(region_id, reason)
        return results

    def build_items(
        self,
        resolved: list[ResolvedOffering],
        weather: WeatherResults,
        today: date,
        attempted: int | None = None,
    ) -> list[DiscoveryItem]:
        """Project, classify and estimate every resolved offering.

        Args:
            resolved: Offerings that resolved cleanly.
            weather: Joined weather fan-out.
            today: Local date to classify against.
            attempted: Active offerings attempted in total (defaults to
                ``len(resolved)``).

        Raises:
            NoPredictionsAvailable: If offerings were attempted and none survived.
        """
        attempted = len(resolved) if attempted is None else attempted
        items: list[DiscoveryItem] = []
        for entry in resolved:
            try:
                items.append(self._build_item(entry, weather, today))
            except SKIPPABLE_ERRORS as e:
                log_skip(entry.offering, e)

        if attempted and not items:
            raise NoPredictionsAvailable(attempted)
        logger.info("Built %d predictions (%d dropped)", len(items), attempted - len(items))
        return items

    def compute_predictions(self) -> list[DiscoveryItem]:
        """Run the full pipeline, bypassing the cache."""
        today = self.today()
        offerings = self.catalog.active_offerings()
        resolved, _ = self.resolve_offerings(offerings)
        weather = self.fetch_weather(self.weather_plan(resolved), reference_date_for(today))
        return self.build_items(resolved, weather, today, attempted=len(offerings))

    def predictions(self) -> tuple[list[DiscoveryItem], bool]:
        """The cached prediction set for this hour and whether it was a cache hit."""
        lookup = self.cache.get_or_compute(self.compute_predictions)
        return lookup.items, lookup.hit

    def predict(self, offering_id: str) -> DiscoveryItem:
        """Predict one offering directly (no cache).

        Raises:
            KeyError: If the offering id is not in the catalog.
            PredictionError: If the offering cannot be predicted.
        """
        offering = self.catalog.offerings[offering_id]
        today = self.today()
        resolved = ResolvedOffering(offering, self.resolver.resolve(offering))
        weather = self.fetch_weather(self.weather_plan([resolved]), reference_date_for(today))
        return self._build_item(resolved, weather, today)

    def _build_item(
        self, entry: ResolvedOffering, weather: WeatherResults, today: date
    ) -> DiscoveryItem:
        offering, resolved = entry.offering, entry.resolved
        cultivar = self.catalog.cultivars[offering.cultivar_id]
        product = self.catalog.product_for(cultivar.id)
        if product is None:
            raise IncompleteModel(offering.cultivar_id, offering.region_id, "product_id", "unknown")
        region = self.catalog.regions.get(offering.region_id)
        if region is None:
            raise DataUnavailable(offering.region_id, "unknown region")

        model = resolved.model
        accumulation = None
        if isinstance(model, GddModel):
            accumulation = weather.get(offering.region_id, model.base_temp)

        window = project(model, accumulation, today)
        result = classify_for_discovery(window, today, self.approaching_days)

        quality = None
        if is_citrus(product):
            try:
                citrus_acc = weather.get(offering.region_id, DEFAULT_BASE_TEMP_F)
            except DataUnavailable:
                logger.info("No quality estimate for %s: weather unavailable", offering.id)
            else:
                quality = estimate_sugar_acid(citrus_acc.total_gdd)

        if isinstance(model, GddModel):
            months = [] if window.indeterminate else months_between(
                window.harvest_start, window.harvest_end
            )
        else:
            months = list(model.peak_months)

        return DiscoveryItem(
            id=offering.id,
            offering_id=offering.id,
            variety_id=cultivar.id,
            product_id=product.id,
            region_id=region.id,
            status=result.status,
            phase=result.phase,
            status_message=result.message,
            harvest_start=window.harvest_start,
            harvest_end=window.harvest_end,
            optimal_start=window.peak_start,
            optimal_end=window.peak_end,
            days_until_start=result.days_until,
            confidence=window.confidence,
            indeterminate=window.indeterminate,
            category=product.category,
            category_display_name=CATEGORY_DISPLAY_NAMES.get(
                product.category, product.category.title()
            ),
            subcategory=product.subcategory,
            model_type=cultivar.model_type.value,
            quality_tier=offering.quality_tier,
            product_display_name=product.display_name,
            variety_display_name=cultivar.display_name,
            region_display_name=region.display_name,
            state=region.state,
            flavor_profile=cultivar.flavor_profile,
            flavor_notes=offering.flavor_notes,
            is_heritage=cultivar.is_heritage,
            seasons=seasons_for_months(months),
            brix=round(quality.ssc, 1) if quality else None,
            acidity=round(quality.ta, 2) if quality else None,
            brix_acid_ratio=round(quality.ratio, 1) if quality else None,
            brim_a=round(quality.brim_a, 1) if quality else None,
        )

    # -------------------------------------------------------------------------
    # Discovery query
    # -------------------------------------------------------------------------

    def discover(
        self,
        lat: float | None = None,
        lon: float | None = None,
        filters: DiscoveryFilters | None = None,
    ) -> DiscoveryResponse:
        """Answer a discovery query from the cached prediction set.

        Args:
            lat: Caller latitude (distance and distance sort need both coords).
            lon: Caller longitude.
            filters: Optional status/category/distance/season narrowing.

        Returns:
            Bucketed, sorted DiscoveryResponse.

        Raises:
            NoPredictionsAvailable: If every active offering failed.
        """
        filters = filters or DiscoveryFilters()
        items, hit = self.predictions()
        has_location = lat is not None and lon is not None

        if has_location:
            items = [self._with_distance(item, lat, lon) for item in items]  # type: ignore[arg-type]

        pool = [item for item in items if _matches(item, filters, has_location)]
        category_counts = Counter(item.category for item in pool)
        season_counts = Counter(season.value for item in pool for season in item.seasons)
        if filters.categories:
            pool = [item for item in pool if item.category in filters.categories]

        def sort_key(item: DiscoveryItem) -> tuple[float | str, str]:
            if has_location:
                return (item.distance_miles or 0, item.id)
            return (item.variety_display_name.lower(), item.id)

        buckets: dict[HarvestStatus, list[DiscoveryItem]] = {s: [] for s in HarvestStatus}
        for item in sorted(pool, key=sort_key):
            buckets[item.status].append(item)
        approaching = sorted(
            buckets[HarvestStatus.APPROACHING],
            key=lambda i: (i.days_until_start or 0, *sort_key(i)),
        )

        return DiscoveryResponse(
            at_peak=buckets[HarvestStatus.AT_PEAK],
            in_season=buckets[HarvestStatus.IN_SEASON],
            approaching=approaching,
            off_season=buckets[HarvestStatus.OFF_SEASON],
            total_results=len(pool),
            category_counts=dict(sorted(category_counts.items())),
            season_counts=dict(sorted(season_counts.items())),
            current_season=current_season(self.today()),
            source="cached" if hit else "live",
            timestamp=self.clock(),
        )

    def _with_distance(self, item: DiscoveryItem, lat: float, lon: float) -> DiscoveryItem:
        region = self.catalog.regions[item.region_id]
        miles = distance_miles(lat, lon, region.latitude, region.longitude)
        return item.model_copy(update={"distance_miles": miles})


def local_today(timezone: str | ZoneInfo, clock: Callable[[], datetime] = utc_now) -> date:
    """Calendar date in ``timezone`` according to ``clock``."""
    tz = timezone if isinstance(timezone, ZoneInfo) else ZoneInfo(timezone)
    return clock().astimezone(tz).date()


def reference_date_for(today: date) -> date:
    """Start of the accumulation cycle: Jan 1 of the current year."""
    return date(today.year, 1, 1)


def _matches(item: DiscoveryItem, filters: DiscoveryFilters, has_location: bool) -> bool:
    if filters.statuses and item.status not in filters.statuses:
        return False
    if (
        filters.max_distance_miles is not None
        and has_location
        and (item.distance_miles or 0) > filters.max_distance_miles
    ):
        return False
    return filters.season is None or filters.season in item.seasons
