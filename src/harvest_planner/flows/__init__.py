"""
Prefect flows for the prediction pipeline.

Flows:
- refresh: Fetch regional temperatures, build predictions, write the snapshot

Usage (local):
    python -m harvest_planner.flows.refresh

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'refresh-predictions/default'
"""
