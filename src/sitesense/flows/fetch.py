"""
Prefect flow for fetching weather data into the store.

Run locally:
    python -m sitesense.flows.fetch

Run with Prefect dashboard:
    prefect server start &
    python -m sitesense.flows.fetch
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any

from prefect import flow, task

from sitesense.config import get_settings
from sitesense.datasources.weather import WeatherFetchError
from sitesense.datasources.weather import current as weather_current
from sitesense.datasources.weather import forecast as weather_forecast
from sitesense.store import DataStore

store = DataStore(get_settings().data_dir)

# Relative paths within the store
FORECAST_PATH = Path("live/forecast.json")
CURRENT_PATH = Path("live/current.json")
ERRORS_PATH = Path("live/fetch_errors.json")

WEATHER_SOURCE = "openweathermap.org"
WEATHER_TTL = timedelta(minutes=30)


@task(name="fetch-forecast", retries=2, retry_delay_seconds=5)
def fetch_forecast(lat: float, lon: float) -> dict[str, Any]:
    """Fetch the raw 5-day / 3-hour forecast body."""
    return weather_forecast.fetch_forecast_raw(lat, lon)


@task(name="fetch-current", retries=2, retry_delay_seconds=5)
def fetch_current(lat: float, lon: float) -> dict[str, Any]:
    """Fetch normalized current conditions."""
    return weather_current.fetch_current(lat, lon).model_dump()


@task(name="save-forecast")
def save_forecast(forecast: dict[str, Any], lat: float, lon: float) -> Path:
    """Save the forecast body via store."""
    return store.write(
        FORECAST_PATH,
        forecast,
        source=WEATHER_SOURCE,
        valid_until=store.clock() + WEATHER_TTL,
        location={"lat": lat, "lon": lon},
    )


@task(name="save-current")
def save_current(current: dict[str, Any], lat: float, lon: float) -> Path:
    """Save current conditions via store."""
    return store.write(
        CURRENT_PATH,
        current,
        source=WEATHER_SOURCE,
        valid_until=store.clock() + WEATHER_TTL,
        location={"lat": lat, "lon": lon},
    )


@flow(name="fetch-weather", log_prints=True)
def fetch_all(lat: float | None = None, lon: float | None = None) -> dict[str, Any]:
    """
    Fetch forecast and current conditions.

    Coordinates default to the configured site (``settings.lat``/``lon``).

    Checks freshness before fetching and skips sources that are still valid.
    A failed fetch is reported in the result under ``*_error`` (and saved
    to ``ERRORS_PATH`` for the build flow) and leaves any previously stored
    data untouched.
    """
    settings = get_settings()
    lat = settings.lat if lat is None else lat
    lon = settings.lon if lon is None else lon
    results: dict[str, Any] = {}

    # --- Forecast ---
    if store.is_fresh(FORECAST_PATH):
        print("Forecast is fresh, skipping fetch.")
        forecast = store.read(FORECAST_PATH) or {}
    else:
        print(f"Fetching forecast for ({lat}, {lon})...")
        try:
            forecast = fetch_forecast(lat, lon)
        except WeatherFetchError as e:
            print(f"Forecast unavailable: {e.detail}")
            results["forecast_error"] = e.detail
            forecast = {}
        else:
            output_path = save_forecast(forecast, lat, lon)
            print(f"Saved {len(forecast.get('list', []))} forecast entries to {output_path}")

    results["forecast_entries"] = len(forecast.get("list", []))

    # --- Current conditions ---
    if store.is_fresh(CURRENT_PATH):
        print("Current conditions are fresh, skipping fetch.")
        current = store.read(CURRENT_PATH) or {}
    else:
        print(f"Fetching current conditions for ({lat}, {lon})...")
        try:
            current = fetch_current(lat, lon)
        except WeatherFetchError as e:
            print(f"Current conditions unavailable: {e.detail}")
            results["current_error"] = e.detail
            current = {}
        else:
            save_current(current, lat, lon)

    results["conditions"] = current.get("conditions")

    # Errors from this run, for the page; cleared once both sources succeed
    errors = {k: v for k, v in results.items() if k.endswith("_error")}
    if errors:
        store.write(ERRORS_PATH, errors, source="sitesense")
    else:
        store.delete(ERRORS_PATH)

    return results


if __name__ == "__main__":
    result = fetch_all()
    print(f"Flow complete: {result}")
