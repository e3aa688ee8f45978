"""
Prefect flows for the weather data pipeline.

Flows:
- fetch: Download forecast and current conditions into the store
- build: Aggregate the stored forecast and render the static weather page

Usage (local):
    python -m sitesense.flows.fetch
    python -m sitesense.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'fetch-weather/default'
"""
