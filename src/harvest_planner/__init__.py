"""Harvest Planner - when regional produce comes into season.

Architecture::

    reference/     Read-only catalog (products, cultivars, regions, offerings)
    datasources/   Open-Meteo archive -> GDD accumulation per region
    analysis/      Pure domain logic (model resolver, window, status, sugar/acid)
    discovery.py   Aggregator: fan-out weather, build items, bucket and sort
    store.py       JSON store with TTL + hour-bucket prediction cache
    flows/         Prefect orchestration (refresh the prediction snapshot)
    services/      Shared utilities (HTTP client with retry)

Data flow: weather -> resolved thresholds -> projected window
           -> status/quality -> cached, sorted discovery feed

Extension points, see each package's docstring for step-by-step guides:
  - New weather source:  datasources/__init__.py
  - New analysis:        analysis/__init__.py
  - New cultivar/region: reference/__init__.py
"""

__version__ = "0.1.0"

from harvest_planner.config import Settings
from harvest_planner.schemas import DiscoveryFilters, DiscoveryItem, DiscoveryResponse

__all__ = [
    "DiscoveryFilters",
    "DiscoveryItem",
    "DiscoveryResponse",
    "Settings",
    "__version__",
]
