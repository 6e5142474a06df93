"""Growing Degree Days (GDD) accumulation provider.

GDD measures accumulated heat above a crop's base temperature, the biological
clock that drives harvest timing for field crops.

Public API:
  - models: DailyGDD, GddAccumulation, AccumulationProvider
  - compute: compute_daily_gdd, compute_accumulated_gdd, trailing_average,
             trailing_stddev, summarize_accumulation
  - client: fetch_temperature_data
  - provider: OpenMeteoAccumulationProvider
  - serialization: accumulation_to_dict, accumulation_from_dict
"""

from harvest_planner.datasources.gdd.client import ARCHIVE_API, fetch_temperature_data
from harvest_planner.datasources.gdd.compute import (
    compute_accumulated_gdd,
    compute_daily_gdd,
    summarize_accumulation,
    trailing_average,
    trailing_stddev,
)
from harvest_planner.datasources.gdd.models import (
    DEFAULT_BASE_TEMP_F,
    DEFAULT_TRAILING_DAYS,
    AccumulationProvider,
    DailyGDD,
    GddAccumulation,
)
from harvest_planner.datasources.gdd.provider import OpenMeteoAccumulationProvider
from harvest_planner.datasources.gdd.serialization import (
    accumulation_from_dict,
    accumulation_to_dict,
)

__all__ = [
    "ARCHIVE_API",
    "DEFAULT_BASE_TEMP_F",
    "DEFAULT_TRAILING_DAYS",
    "AccumulationProvider",
    "DailyGDD",
    "GddAccumulation",
    "OpenMeteoAccumulationProvider",
    "accumulation_from_dict",
    "accumulation_to_dict",
    "compute_accumulated_gdd",
    "compute_daily_gdd",
    "fetch_temperature_data",
    "summarize_accumulation",
    "trailing_average",
    "trailing_stddev",
]
