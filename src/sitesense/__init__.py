"""SiteSense - field weather and sample-entry helpers for environmental inspections.

Architecture::

    datasources/   External APIs (OpenWeather-compatible forecast + current conditions)
    store.py       JSON cache with TTL envelopes (live forecast, last-known coordinates)
    preview.py     Header weather preview with expiry and coordinate fallback chain
    analysis/      Pure transforms (hourly forecast entries -> daily summaries)
    samples/       Field-entry parsing (quantity strings, lab-result unit derivation)
    renderers/     Pure data -> HTML (weather widget, header preview)
    flows/         Prefect orchestration (fetch checks freshness, build renders site)
    services/      Shared utilities (HTTP client with retry, geolocation lookup)

Data flow: datasources -> store (cache) -> analysis -> renderers -> derived/site/
"""

__version__ = "0.1.0"
__author__ = "SiteSense"

from sitesense.config import Settings
from sitesense.samples.quantity import Quantity, QuantityUnit

__all__ = ["Quantity", "QuantityUnit", "Settings", "__version__"]
