"""Current conditions at a location."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sitesense.datasources.weather.client import CURRENT_PATH, get_json
from sitesense.schemas import CurrentConditions

if TYPE_CHECKING:
    from sitesense.config import Settings


def fetch_current(
    lat: float,
    lon: float,
    *,
    settings: Settings | None = None,
) -> CurrentConditions:
    """
    Fetch and normalize current weather.

    Raises:
        WeatherFetchError: If the API call fails.
    """
    payload = get_json(CURRENT_PATH, lat, lon, settings=settings)
    return CurrentConditions.from_api(payload, lat, lon)
