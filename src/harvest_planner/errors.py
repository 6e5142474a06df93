"""Prediction engine error types.

Per-offering errors (``DataUnavailable``, ``IncompleteModel``,
``InvalidCultivarChain``) are recoverable: the aggregator drops the offering
and logs it. ``NoPredictionsAvailable`` is the only error that reaches the
caller of a discovery query.
"""

from __future__ import annotations


class PredictionError(Exception):
    """Base class for prediction engine errors."""


class DataUnavailable(PredictionError):
    """The weather provider has no usable coverage for a region."""

    def __init__(self, region_id: str, reason: str = "no weather coverage") -> None:
        self.region_id = region_id
        self.reason = reason
        super().__init__(f"Weather data unavailable for region {region_id!r}: {reason}")


class IncompleteModel(PredictionError):
    """A threshold the resolved model needs is missing or inconsistent."""

    def __init__(self, cultivar_id: str, region_id: str, field: str, detail: str = "missing") -> None:
        self.cultivar_id = cultivar_id
        self.region_id = region_id
        self.field = field
        self.detail = detail
        super().__init__(
            f"Incomplete model for cultivar {cultivar_id!r} in region {region_id!r}: "
            f"{field} {detail}"
        )


class InvalidCultivarChain(PredictionError):
    """A ``parent`` cultivar reference is cyclic, too deep, or dangling."""

    def __init__(self, cultivar_id: str, chain: list[str], reason: str) -> None:
        self.cultivar_id = cultivar_id
        self.chain = chain
        self.reason = reason
        path = " -> ".join(chain)
        super().__init__(f"Invalid parent chain for cultivar {cultivar_id!r} ({path}): {reason}")


class NoPredictionsAvailable(PredictionError):
    """Every active offering failed; there is nothing to show."""

    def __init__(self, attempted: int) -> None:
        self.attempted = attempted
        super().__init__(f"All {attempted} active offerings failed to produce a prediction")
