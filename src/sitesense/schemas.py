"""
Boundary models for external weather data.

Pydantic models that upstream JSON is validated into exactly once. Every
field is optional: the weather API omits fields freely, and a malformed
value is treated as absent rather than as an error. Downstream code
(aggregation, rendering) works only with these models.
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_CONDITION = "Unknown"
UNAVAILABLE_DESCRIPTION = "Weather data unavailable"
UNKNOWN_LOCATION = "Location unknown"


def finite_or_none(value: Any) -> float | None:
    """Coerce ``value`` to a finite float, or None if that isn't possible."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first_weather(item: dict[str, Any]) -> dict[str, Any]:
    weather = item.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        return weather[0]
    return {}


def _section(item: dict[str, Any], key: str) -> dict[str, Any]:
    section = item.get(key)
    return section if isinstance(section, dict) else {}


# =============================================================================
# Forecast
# =============================================================================


class ForecastEntry(BaseModel):
    """One timestamped forecast point (typically 3-hourly)."""

    model_config = ConfigDict(frozen=True)

    timestamp: int | None = Field(default=None, description="Unix seconds")
    temperature: float | None = None
    precipitation_probability: float | None = Field(default=None, description="0..1")
    condition_label: str | None = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def _coerce_timestamp(cls, value: Any) -> int | None:
        number = finite_or_none(value)
        return int(number) if number is not None else None

    @field_validator("temperature", "precipitation_probability", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float | None:
        return finite_or_none(value)

    @field_validator("condition_label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str | None:
        if isinstance(value, str) and value:
            return value
        return None

    @classmethod
    def from_api(cls, item: Any) -> ForecastEntry:
        """Build an entry from one element of the upstream ``list`` array.

        Expected shape: ``{"dt": ..., "main": {"temp": ...}, "pop": ...,
        "weather": [{"main": ...}]}``. Missing levels yield None fields.
        """
        if not isinstance(item, dict):
            return cls()
        return cls(
            timestamp=item.get("dt"),
            temperature=_section(item, "main").get("temp"),
            precipitation_probability=item.get("pop"),
            condition_label=_first_weather(item).get("main"),
        )


# =============================================================================
# Current conditions
# =============================================================================


class Coordinates(BaseModel):
    """A latitude/longitude pair."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def label(self) -> str:
        return f"{self.lat:.2f}, {self.lon:.2f}"


class CurrentConditions(BaseModel):
    """Normalized current weather at a location."""

    conditions: str = UNKNOWN_CONDITION
    temperature: int = 0
    humidity: int = 0
    wind_speed: int = 0
    wind_deg: float | None = None
    pressure: float | None = None
    description: str = UNAVAILABLE_DESCRIPTION
    location: str = UNKNOWN_LOCATION

    @classmethod
    def from_api(
        cls,
        payload: Any,
        lat: float | None = None,
        lon: float | None = None,
    ) -> CurrentConditions:
        """Normalize an upstream current-weather payload.

        Args:
            payload: Raw JSON body (``weather``, ``main``, ``wind``, ``name``,
                ``sys.country``).
            lat: Requested latitude, used for the location label when the
                payload carries no place name.
            lon: Requested longitude.
        """
        data = payload if isinstance(payload, dict) else {}
        weather = _first_weather(data)
        main = _section(data, "main")
        wind = _section(data, "wind")

        return cls(
            conditions=weather.get("main") or UNKNOWN_CONDITION,
            temperature=round_half_up(finite_or_none(main.get("temp")) or 0),
            humidity=round_half_up(finite_or_none(main.get("humidity")) or 0),
            wind_speed=round_half_up(finite_or_none(wind.get("speed")) or 0),
            wind_deg=finite_or_none(wind.get("deg")),
            pressure=finite_or_none(main.get("pressure")),
            description=weather.get("description") or UNAVAILABLE_DESCRIPTION,
            location=_location_label(data, lat, lon),
        )


def _location_label(data: dict[str, Any], lat: float | None, lon: float | None) -> str:
    name = data.get("name")
    if name:
        country = _section(data, "sys").get("country")
        return f"{name}, {country}" if country else str(name)
    if lat is not None and lon is not None:
        return Coordinates(lat=lat, lon=lon).label()
    return UNKNOWN_LOCATION


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)
