"""Weather API client constants and the shared GET helper.

API docs:
  - Forecast: https://openweathermap.org/forecast5
  - Current: https://openweathermap.org/current

The base URL is configurable so the app can also point at its own backend
proxy exposing the same ``/forecast`` and ``/weather`` shapes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import requests

from sitesense.config import get_settings
from sitesense.services.http import session

if TYPE_CHECKING:
    from sitesense.config import Settings

logger = logging.getLogger(__name__)

FORECAST_PATH = "/forecast"
CURRENT_PATH = "/weather"


class WeatherFetchError(Exception):
    """The weather API could not be reached or answered with a non-2xx status."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def get_json(
    path: str,
    lat: float,
    lon: float,
    *,
    settings: Settings | None = None,
    default_error: str = "Failed to fetch weather data",
) -> Any:
    """
    GET a weather endpoint and return the decoded JSON body.

    Args:
        path: Endpoint path relative to ``settings.weather_api_base``.
        lat: Latitude.
        lon: Longitude.
        settings: Settings override (defaults to ``get_settings()``).
        default_error: Error detail when a failed response has no body.

    Raises:
        WeatherFetchError: On transport errors, non-2xx responses (detail is
            the response body text) or an undecodable body.
    """
    settings = settings or get_settings()
    url = settings.weather_api_base.rstrip("/") + path
    params: dict[str, str | float] = {
        "lat": lat,
        "lon": lon,
        "units": settings.weather_units,
    }
    if settings.weather_api_key:
        params["appid"] = settings.weather_api_key

    try:
        resp = session.get(url, params=params)
    except requests.RequestException as e:
        logger.warning("Weather request to %s failed: %s", url, e)
        raise WeatherFetchError(str(e) or default_error) from e

    if not resp.ok:
        logger.warning("Weather API %s returned %d", url, resp.status_code)
        raise WeatherFetchError(resp.text or default_error, status_code=resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        raise WeatherFetchError(f"Invalid JSON from weather API: {e}") from e
