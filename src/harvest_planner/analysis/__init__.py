"""Prediction domain logic.

Each module is pure: no I/O, no HTTP, no Prefect decorators. Inputs are
catalog records and GDD accumulations; outputs are dataclasses the
aggregator joins into discovery items.

Modules:
  - cultivar_model: offering + catalog -> resolved GDD or calendar model
  - harvest_window: resolved model + accumulation -> dated harvest window
  - harvest_status: window + today -> status, message, days until
  - sugar_acid: accumulated GDD -> citrus sugar/acid estimate
  - seasons: month -> season helpers for filtering and counts

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with pure functions over datasource *models*
   (never call fetch functions here).
2. Call it from ``discovery.DiscoveryService._build_item``.
3. Add tests in ``tests/test_{name}.py``.
"""
