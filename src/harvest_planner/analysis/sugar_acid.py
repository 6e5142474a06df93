"""Citrus sugar/acid estimate from accumulated heat.

Soluble solids (SSC, °Brix) rise and titratable acidity (TA, %) falls as
fruit accumulates heat::

    ssc    = 6 + 7 * (1 - exp(-gdd / 2500))     # 6 -> 13 °Brix
    ta     = 0.5 + 2.0 * exp(-gdd / 2000)       # 2.5 -> 0.5 %
    ratio  = ssc / ta
    brim_a = ssc - 4 * ta                       # BrimA palatability index

Only meaningful for citrus.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from harvest_planner.reference.catalog import Product

MAX_GDD = 10_000.0

SSC_MIN = 6.0
SSC_RANGE = 7.0
SSC_SCALE = 2500.0

TA_FLOOR = 0.5
TA_RANGE = 2.0
TA_SCALE = 2000.0

CITRUS_SUBCATEGORY = "citrus"


@dataclass(frozen=True)
class SugarAcidEstimate:
    """Estimated fruit chemistry at a given heat accumulation."""

    ssc: float
    ta: float
    ratio: float
    brim_a: float


def _clamp_gdd(total_gdd: float) -> float:
    if math.isnan(total_gdd):
        return 0.0
    return min(MAX_GDD, max(0.0, total_gdd))


def estimate_sugar_acid(total_gdd: float) -> SugarAcidEstimate:
    """Estimate SSC, TA, ratio and BrimA for ``total_gdd``.

    Inputs are clamped to ``[0, 10000]``; NaN counts as 0 and +inf as the cap,
    so the result is always finite with ``ta`` at least 0.5.
    """
    gdd = _clamp_gdd(total_gdd)
    ssc = SSC_MIN + SSC_RANGE * (1 - math.exp(-gdd / SSC_SCALE))
    ta = TA_FLOOR + TA_RANGE * math.exp(-gdd / TA_SCALE)
    return SugarAcidEstimate(ssc=ssc, ta=ta, ratio=ssc / ta, brim_a=ssc - 4 * ta)


def is_citrus(product: Product | None) -> bool:
    """Whether the quality estimate applies to ``product``."""
    return product is not None and product.subcategory == CITRUS_SUBCATEGORY
