"""Resolve a regional offering to the concrete model that times its harvest.

A cultivar's model type is a tagged variant:

  - ``gdd``      -> ``GddModel``      (base temp + maturity/peak/window GDD)
  - ``calendar`` -> ``CalendarModel`` (peak months)
  - ``parent``   -> follow ``parent_cultivar_id`` until a gdd/calendar ancestor

Effective thresholds are ``offering override ?? cultivar default`` per field.
A field missing from both is only an error when the resolved model needs it.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from harvest_planner.errors import IncompleteModel, InvalidCultivarChain
from harvest_planner.reference.catalog import ModelType, Thresholds

if TYPE_CHECKING:
    from harvest_planner.reference.catalog import Catalog, Cultivar, RegionalOffering

# Longest parent chain we follow before treating the catalog as broken
MAX_PARENT_DEPTH = 4


@dataclass(frozen=True)
class GddModel:
    """Heat-driven harvest timing, all thresholds in accumulated GDD."""

    base_temp: float
    maturity_gdd: float
    peak_gdd: float
    window_gdd: float

    @property
    def harvest_end_gdd(self) -> float:
        return self.maturity_gdd + self.window_gdd

    @property
    def peak_end_gdd(self) -> float:
        return min(self.peak_gdd + self.window_gdd / 4, self.harvest_end_gdd)


@dataclass(frozen=True)
class CalendarModel:
    """Month-driven harvest timing."""

    peak_months: tuple[int, ...]

    @property
    def is_year_round(self) -> bool:
        return len(set(self.peak_months)) == 12


ResolvedModel = GddModel | CalendarModel


@dataclass(frozen=True)
class ResolvedThresholds:
    """The effective model for one offering."""

    offering_id: str
    cultivar_id: str
    region_id: str
    source_cultivar_id: str
    model: ResolvedModel

    @property
    def model_type(self) -> ModelType:
        """Model type of the resolved (non-parent) ancestor."""
        return ModelType.GDD if isinstance(self.model, GddModel) else ModelType.CALENDAR


def merge_thresholds(defaults: Thresholds, overrides: Thresholds) -> Thresholds:
    """Layer offering overrides over cultivar defaults, field by field."""
    merged = {}
    for f in fields(Thresholds):
        override = getattr(overrides, f.name)
        merged[f.name] = override if override is not None else getattr(defaults, f.name)
    return Thresholds(**merged)


def resolve_source_cultivar(cultivar_id: str, catalog: Catalog) -> Cultivar:
    """Follow ``parent`` links to the cultivar whose model actually applies.

    Args:
        cultivar_id: Starting cultivar.
        catalog: Catalog to look cultivars up in.

    Returns:
        The first non-parent cultivar in the chain.

    Raises:
        InvalidCultivarChain: On a cycle, a chain longer than
            ``MAX_PARENT_DEPTH``, or a reference to an unknown cultivar.
    """
    chain: list[str] = []
    visited: set[str] = set()
    current_id: str | None = cultivar_id

    while True:
        if current_id is None:
            raise InvalidCultivarChain(cultivar_id, chain, "parent cultivar has no parent reference")
        if current_id in visited:
            raise InvalidCultivarChain(cultivar_id, [*chain, current_id], "cyclic parent reference")
        chain.append(current_id)
        visited.add(current_id)

        cultivar = catalog.cultivars.get(current_id)
        if cultivar is None:
            raise InvalidCultivarChain(cultivar_id, chain, f"unknown cultivar {current_id!r}")
        if cultivar.model_type != ModelType.PARENT:
            return cultivar
        if len(chain) > MAX_PARENT_DEPTH:
            raise InvalidCultivarChain(
                cultivar_id, chain, f"parent chain deeper than {MAX_PARENT_DEPTH}"
            )
        current_id = cultivar.parent_cultivar_id


def _required(value: float | None, name: str, offering: RegionalOffering) -> float:
    if value is None:
        raise IncompleteModel(offering.cultivar_id, offering.region_id, name)
    return value


def _build_gdd_model(thresholds: Thresholds, offering: RegionalOffering) -> GddModel:
    model = GddModel(
        base_temp=_required(thresholds.base_temp, "base_temp", offering),
        maturity_gdd=_required(thresholds.gdd_to_maturity, "gdd_to_maturity", offering),
        peak_gdd=_required(thresholds.gdd_to_peak, "gdd_to_peak", offering),
        window_gdd=_required(thresholds.gdd_window, "gdd_window", offering),
    )

    def invalid(name: str, detail: str) -> IncompleteModel:
        return IncompleteModel(offering.cultivar_id, offering.region_id, name, detail)

    if model.maturity_gdd < 0:
        raise invalid("gdd_to_maturity", "is negative")
    if model.window_gdd <= 0:
        raise invalid("gdd_window", "must be positive")
    if model.peak_gdd < model.maturity_gdd:
        raise invalid("gdd_to_peak", "is below gdd_to_maturity")
    if model.peak_gdd > model.harvest_end_gdd:
        raise invalid("gdd_to_peak", "exceeds gdd_to_maturity + gdd_window")
    return model


def _build_calendar_model(thresholds: Thresholds, offering: RegionalOffering) -> CalendarModel:
    months = thresholds.peak_months
    if not months:
        raise IncompleteModel(offering.cultivar_id, offering.region_id, "peak_months")
    bad = [m for m in months if not 1 <= m <= 12]
    if bad:
        raise IncompleteModel(
            offering.cultivar_id, offering.region_id, "peak_months", f"out of range: {bad}"
        )
    return CalendarModel(peak_months=tuple(months))


def resolve(offering: RegionalOffering, catalog: Catalog) -> ResolvedThresholds:
    """Resolve an offering to its effective harvest model.

    Args:
        offering: The (cultivar, region) pair to resolve.
        catalog: Reference catalog.

    Returns:
        ResolvedThresholds carrying a ``GddModel`` or ``CalendarModel``.

    Raises:
        InvalidCultivarChain: If the parent chain is broken.
        IncompleteModel: If a needed threshold is missing, or bounds are
            inverted (peak before maturity, peak past the window, empty
            or out-of-range peak months).
    """
    source = resolve_source_cultivar(offering.cultivar_id, catalog)
    thresholds = merge_thresholds(source.defaults, offering.overrides)

    model: ResolvedModel
    if source.model_type == ModelType.GDD:
        model = _build_gdd_model(thresholds, offering)
    else:
        model = _build_calendar_model(thresholds, offering)

    return ResolvedThresholds(
        offering_id=offering.id,
        cultivar_id=offering.cultivar_id,
        region_id=offering.region_id,
        source_cultivar_id=source.id,
        model=model,
    )


class ThresholdResolver:
    """Memoizes ``resolve`` by (cultivar_id, region_id) for one catalog."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self._cache: dict[tuple[str, str], ResolvedThresholds] = {}
        self._lock = threading.Lock()

    def resolve(self, offering: RegionalOffering) -> ResolvedThresholds:
        key = (offering.cultivar_id, offering.region_id)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        resolved = resolve(offering, self.catalog)
        with self._lock:
            self._cache[key] = resolved
        return resolved
