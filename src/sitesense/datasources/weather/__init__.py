"""OpenWeather-compatible weather data source.

Public API:
  - forecast: fetch_forecast, parse_forecast (5-day / 3-hour forecast points)
  - current: fetch_current (current conditions at a location)
  - client: WeatherFetchError, endpoint paths
"""

from sitesense.datasources.weather.client import (
    CURRENT_PATH,
    FORECAST_PATH,
    WeatherFetchError,
)
from sitesense.datasources.weather.current import fetch_current
from sitesense.datasources.weather.forecast import fetch_forecast, parse_forecast

__all__ = [
    "CURRENT_PATH",
    "FORECAST_PATH",
    "WeatherFetchError",
    "fetch_current",
    "fetch_forecast",
    "parse_forecast",
]
