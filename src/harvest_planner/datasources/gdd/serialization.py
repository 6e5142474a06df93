"""JSON serialization helpers for GDD data structures."""

from __future__ import annotations

from datetime import date
from typing import Any

from harvest_planner.datasources.gdd.models import GddAccumulation


def accumulation_to_dict(acc: GddAccumulation) -> dict[str, Any]:
    """Serialize a GddAccumulation to a JSON-compatible dict.

    Args:
        acc: The accumulation to serialize.

    Returns:
        Dict with totals, rate statistics and the accumulated history.
    """
    return {
        "region_id": acc.region_id,
        "base_temp": acc.base_temp,
        "reference_date": acc.reference_date.isoformat(),
        "total_gdd": round(acc.total_gdd, 1),
        "avg_daily_gdd": round(acc.avg_daily_gdd, 2),
        "daily_stddev": round(acc.daily_stddev, 2),
        "days_observed": acc.days_observed,
        "through": acc.through.isoformat() if acc.through else None,
        "history": [[d.isoformat(), round(v, 1)] for d, v in acc.history],
    }


def accumulation_from_dict(data: dict[str, Any]) -> GddAccumulation:
    """Rebuild a GddAccumulation from ``accumulation_to_dict`` output."""
    through = data.get("through")
    return GddAccumulation(
        region_id=data["region_id"],
        base_temp=float(data["base_temp"]),
        reference_date=date.fromisoformat(data["reference_date"]),
        total_gdd=float(data.get("total_gdd", 0.0)),
        avg_daily_gdd=float(data.get("avg_daily_gdd", 0.0)),
        daily_stddev=float(data.get("daily_stddev", 0.0)),
        days_observed=int(data.get("days_observed", 0)),
        through=date.fromisoformat(through) if through else None,
        history=[(date.fromisoformat(d), float(v)) for d, v in data.get("history", [])],
    )
