"""Tests for the weather boundary models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sitesense.schemas import (
    Coordinates,
    CurrentConditions,
    ForecastEntry,
    finite_or_none,
    round_half_up,
)


class TestFiniteOrNone:
    """Number coercion used at the boundary."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12, 12.0),
            (3.5, 3.5),
            ("7.25", 7.25),
            (None, None),
            ("abc", None),
            (float("nan"), None),
            (float("inf"), None),
            (True, None),
            ([1], None),
        ],
    )
    def test_coercion(self, value: object, expected: float | None) -> None:
        assert finite_or_none(value) == expected


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (3.5, 4), (-2.5, -2), (-2.6, -3), (0.49, 0), (61.5, 62)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestForecastEntry:
    """Parsing one forecast point from the upstream shape."""

    def test_from_api_full_item(self) -> None:
        item = {
            "dt": 1770033600,
            "main": {"temp": 48.3, "humidity": 80},
            "pop": 0.35,
            "weather": [{"main": "Rain", "description": "light rain"}],
        }

        parsed = ForecastEntry.from_api(item)

        assert parsed.timestamp == 1770033600
        assert parsed.temperature == 48.3
        assert parsed.precipitation_probability == 0.35
        assert parsed.condition_label == "Rain"

    def test_from_api_missing_levels(self) -> None:
        parsed = ForecastEntry.from_api({"dt": 1770033600})

        assert parsed.timestamp == 1770033600
        assert parsed.temperature is None
        assert parsed.precipitation_probability is None
        assert parsed.condition_label is None

    def test_from_api_wrong_types(self) -> None:
        item = {"dt": "soon", "main": "hot", "pop": "n/a", "weather": {"main": "Rain"}}

        parsed = ForecastEntry.from_api(item)

        assert parsed == ForecastEntry()

    def test_from_api_empty_weather_list(self) -> None:
        assert ForecastEntry.from_api({"dt": 1, "weather": []}).condition_label is None

    def test_from_api_non_dict(self) -> None:
        assert ForecastEntry.from_api("garbage") == ForecastEntry()

    def test_numeric_strings_accepted(self) -> None:
        parsed = ForecastEntry.from_api({"dt": "1770033600", "main": {"temp": "51.5"}})
        assert parsed.timestamp == 1770033600
        assert parsed.temperature == 51.5

    def test_entries_are_frozen(self) -> None:
        parsed = ForecastEntry(timestamp=1, temperature=2.0)
        with pytest.raises(ValidationError):
            parsed.temperature = 5.0  # type: ignore[misc]


class TestCurrentConditions:
    """Normalizing the current-weather payload."""

    def test_full_payload(self) -> None:
        payload = {
            "weather": [{"main": "Clouds", "description": "broken clouds"}],
            "main": {"temp": 57.6, "humidity": 71.4, "pressure": 1016},
            "wind": {"speed": 8.5, "deg": 200},
            "name": "Portland",
            "sys": {"country": "US"},
        }

        current = CurrentConditions.from_api(payload, 45.5, -122.6)

        assert current.conditions == "Clouds"
        assert current.temperature == 58
        assert current.humidity == 71
        assert current.wind_speed == 9
        assert current.wind_deg == 200
        assert current.pressure == 1016
        assert current.description == "broken clouds"
        assert current.location == "Portland, US"

    def test_name_without_country(self) -> None:
        current = CurrentConditions.from_api({"name": "Salem"})
        assert current.location == "Salem"

    def test_coordinates_label_when_unnamed(self) -> None:
        current = CurrentConditions.from_api({}, 45.5123, -122.6789)
        assert current.location == "45.51, -122.68"

    def test_empty_payload_defaults(self) -> None:
        current = CurrentConditions.from_api(None)

        assert current.conditions == "Unknown"
        assert current.temperature == 0
        assert current.description == "Weather data unavailable"
        assert current.location == "Location unknown"
        assert current.wind_deg is None


class TestCoordinates:
    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Coordinates(lat=95.0, lon=0.0)

    def test_label(self) -> None:
        assert Coordinates(lat=45.5, lon=-122.6).label() == "45.50, -122.60"
