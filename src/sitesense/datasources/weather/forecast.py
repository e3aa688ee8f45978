"""5-day / 3-hour forecast points."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sitesense.datasources.weather.client import FORECAST_PATH, get_json
from sitesense.schemas import ForecastEntry

if TYPE_CHECKING:
    from sitesense.config import Settings


def parse_forecast(payload: Any) -> list[ForecastEntry]:
    """Validate the ``list`` array of a forecast body into entries.

    A missing or non-list ``list`` field yields an empty forecast.
    """
    items = payload.get("list") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return []
    return [ForecastEntry.from_api(item) for item in items]


def fetch_forecast_raw(
    lat: float,
    lon: float,
    *,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Fetch the forecast body unparsed (for caching in the store).

    Raises:
        WeatherFetchError: If the API call fails.
    """
    payload = get_json(
        FORECAST_PATH, lat, lon, settings=settings, default_error="Failed to fetch forecast"
    )
    return payload if isinstance(payload, dict) else {}


def fetch_forecast(
    lat: float,
    lon: float,
    *,
    settings: Settings | None = None,
) -> list[ForecastEntry]:
    """
    Fetch forecast entries for a location.

    Args:
        lat: Latitude.
        lon: Longitude.
        settings: Settings override.

    Raises:
        WeatherFetchError: If the API call fails.
    """
    return parse_forecast(fetch_forecast_raw(lat, lon, settings=settings))
