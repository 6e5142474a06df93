"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, session
    ├── models.py         # Dataclasses for computed results
    └── {feature}.py      # Pure computation / provider adapters

Currently:

    gdd/    Open-Meteo archive temperatures -> growing degree day accumulation

Adding a new weather source
---------------------------
1. Create ``datasources/{name}/`` with the files above.

2. Implement the ``AccumulationProvider`` protocol from ``gdd.models``
   (``get_gdd_accumulation`` and ``get_region_accumulations``) and raise
   ``errors.DataUnavailable`` for every per-region failure.

3. Pass the provider to ``DiscoveryService``; nothing else depends on a
   specific weather vendor.

4. Add tests in ``tests/test_{name}.py``.
"""
