"""Header weather preview: today's conditions with a high/low.

The preview is refreshed at most every 30 minutes (configurable) and is kept
in the store so the interval holds across CLI runs. Coordinates are resolved
through a fallback chain: explicit coordinates, then the last-known
coordinates persisted in the store, then a geolocation lookup. When no
coordinates can be found, or the first fetch fails, the preview is
unavailable (None).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from sitesense.analysis.daily_forecast import today_high_low
from sitesense.datasources.weather import WeatherFetchError
from sitesense.datasources.weather import current as weather_current
from sitesense.datasources.weather import forecast as weather_forecast
from sitesense.schemas import Coordinates
from sitesense.services import geolocation
from sitesense.store import utc_now

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sitesense.schemas import CurrentConditions, ForecastEntry
    from sitesense.store import DataStore

logger = logging.getLogger(__name__)

LAST_COORDS_PATH = Path("live/last_weather_coords.json")
PREVIEW_PATH = Path("live/weather_preview.json")
DEFAULT_REFRESH_INTERVAL = timedelta(minutes=30)


@dataclass
class WeatherPreview:
    """What the header shows: condition label and today's high/low."""

    conditions: str
    high: int | None
    low: int | None
    coords: Coordinates
    fetched_at: datetime


class WeatherPreviewCache:
    """Time-boxed cache for the header weather preview."""

    def __init__(
        self,
        store: DataStore | None = None,
        *,
        clock: Callable[[], datetime] = utc_now,
        locator: Callable[[], Coordinates | None] | None = None,
        fetch_current: Callable[[float, float], CurrentConditions] | None = None,
        fetch_forecast: Callable[[float, float], Sequence[ForecastEntry]] | None = None,
        refresh_interval: timedelta = DEFAULT_REFRESH_INTERVAL,
        tz: tzinfo | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.refresh_interval = refresh_interval
        self.tz = tz
        self._locator = locator or geolocation.locate
        self._fetch_current = fetch_current or weather_current.fetch_current
        self._fetch_forecast = fetch_forecast or weather_forecast.fetch_forecast
        self._last_coords: Coordinates | None = None
        self._preview: WeatherPreview | None = None
        self._expires_at: datetime | None = None

    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    # -------------------------------------------------------------------------
    # Coordinates
    # -------------------------------------------------------------------------

    def remembered_coords(self) -> Coordinates | None:
        """Last-known coordinates, from memory or the store."""
        if self._last_coords is not None:
            return self._last_coords
        if self.store is None:
            return None

        data = self.store.read(LAST_COORDS_PATH)
        if not isinstance(data, dict):
            return None
        try:
            self._last_coords = Coordinates.model_validate(data)
        except ValidationError:
            logger.warning("Ignoring malformed cached coordinates: %s", data)
            return None
        return self._last_coords

    def remember(self, coords: Coordinates) -> None:
        self._last_coords = coords
        if self.store is not None:
            self.store.write(LAST_COORDS_PATH, coords.model_dump(), source="sitesense")

    def resolve_coords(
        self, lat: float | None = None, lon: float | None = None
    ) -> Coordinates | None:
        """Explicit coordinates, else last-known, else geolocation."""
        if lat is not None and lon is not None:
            coords = Coordinates(lat=lat, lon=lon)
            self.remember(coords)
            return coords

        cached = self.remembered_coords()
        if cached is not None:
            return cached

        located = self._locator()
        if located is not None:
            self.remember(located)
        return located

    # -------------------------------------------------------------------------
    # Preview
    # -------------------------------------------------------------------------

    def is_expired(self) -> bool:
        return self._expires_at is None or self.clock() >= self._expires_at

    def invalidate(self) -> None:
        self._preview = None
        self._expires_at = None
        if self.store is not None:
            self.store.delete(PREVIEW_PATH)

    def get(self, lat: float | None = None, lon: float | None = None) -> WeatherPreview | None:
        """
        Return the current preview, refreshing it when expired.

        Args:
            lat: Explicit latitude (both lat and lon must be given to count).
            lon: Explicit longitude.

        Returns:
            The preview, the previous preview if a refresh failed, or None
            when weather is unavailable.
        """
        coords = self.resolve_coords(lat, lon)
        if coords is None:
            logger.info("No coordinates available for weather preview")
            return None

        if self._preview is None:
            self._load_stored()

        if self._preview is not None and self._preview.coords == coords and not self.is_expired():
            return self._preview

        now = self.clock()
        try:
            current = self._fetch_current(coords.lat, coords.lon)
            entries = self._fetch_forecast(coords.lat, coords.lon)
        except WeatherFetchError as e:
            logger.warning("Weather preview refresh failed: %s", e.detail)
            return self._preview

        today = now.astimezone(self.tz).date()
        high, low = today_high_low(entries, today=today, tz=self.tz)
        self._preview = WeatherPreview(
            conditions=current.conditions,
            high=high,
            low=low,
            coords=coords,
            fetched_at=now,
        )
        self._expires_at = now + self.refresh_interval
        self._save()
        return self._preview

    # -------------------------------------------------------------------------
    # Persistence (so the refresh interval holds across processes)
    # -------------------------------------------------------------------------

    def _save(self) -> None:
        if self.store is None or self._preview is None or self._expires_at is None:
            return
        preview = self._preview
        self.store.write(
            PREVIEW_PATH,
            {
                "conditions": preview.conditions,
                "high": preview.high,
                "low": preview.low,
                "coords": preview.coords.model_dump(),
                "fetched_at": preview.fetched_at.isoformat(),
            },
            source="sitesense",
            valid_until=self._expires_at,
        )

    def _load_stored(self) -> None:
        if self.store is None:
            return
        envelope = self.store.read_raw(PREVIEW_PATH)
        if envelope is None:
            return
        data = envelope.get("data") or {}
        try:
            preview = WeatherPreview(
                conditions=str(data["conditions"]),
                high=data.get("high"),
                low=data.get("low"),
                coords=Coordinates.model_validate(data["coords"]),
                fetched_at=datetime.fromisoformat(data["fetched_at"]),
            )
            expires_at = datetime.fromisoformat(envelope["meta"]["valid_until"])
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Ignoring malformed stored weather preview: %s", e)
            return
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        self._preview = preview
        self._expires_at = expires_at
