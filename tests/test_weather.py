"""Tests for the weather datasource (forecast + current conditions)."""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
import requests

from sitesense.config import Settings
from sitesense.datasources.weather import (
    WeatherFetchError,
    fetch_current,
    fetch_forecast,
    parse_forecast,
)
from sitesense.datasources.weather.forecast import fetch_forecast_raw

SETTINGS = Settings(
    weather_api_base="https://weather.example.test/data/2.5/",
    weather_api_key="secret",
    weather_units="imperial",
)

FORECAST_BODY = {
    "cod": "200",
    "list": [
        {"dt": 1770033600, "main": {"temp": 48.2}, "pop": 0.1, "weather": [{"main": "Clouds"}]},
        {"dt": 1770044400, "main": {"temp": 52.9}, "pop": 0.6, "weather": [{"main": "Rain"}]},
    ],
    "city": {"name": "Portland"},
}


def ok_response(body: object) -> Mock:
    resp = Mock(ok=True, status_code=200)
    resp.json.return_value = body
    return resp


def error_response(status: int, text: str) -> Mock:
    return Mock(ok=False, status_code=status, text=text)


class TestParseForecast:
    """Validating the forecast body."""

    def test_parses_list(self) -> None:
        entries = parse_forecast(FORECAST_BODY)

        assert len(entries) == 2
        assert entries[1].temperature == 52.9
        assert entries[1].condition_label == "Rain"

    @pytest.mark.parametrize("payload", [None, {}, {"list": "nope"}, [1, 2]])
    def test_missing_list(self, payload: object) -> None:
        assert parse_forecast(payload) == []


class TestFetchForecast:
    """HTTP behavior of the forecast fetcher."""

    @patch("sitesense.datasources.weather.client.session.get")
    def test_request_params(self, mock_get: Mock) -> None:
        mock_get.return_value = ok_response(FORECAST_BODY)

        entries = fetch_forecast(45.5, -122.6, settings=SETTINGS)

        assert len(entries) == 2
        url = mock_get.call_args.args[0]
        params = mock_get.call_args.kwargs["params"]
        assert url == "https://weather.example.test/data/2.5/forecast"
        assert params == {"lat": 45.5, "lon": -122.6, "units": "imperial", "appid": "secret"}

    @patch("sitesense.datasources.weather.client.session.get")
    def test_no_api_key_omits_appid(self, mock_get: Mock) -> None:
        mock_get.return_value = ok_response(FORECAST_BODY)

        fetch_forecast(45.5, -122.6, settings=Settings(weather_api_key=""))

        assert "appid" not in mock_get.call_args.kwargs["params"]

    @patch("sitesense.datasources.weather.client.session.get")
    def test_non_2xx_uses_body_text(self, mock_get: Mock) -> None:
        mock_get.return_value = error_response(401, '{"cod":401,"message":"Invalid API key"}')

        with pytest.raises(WeatherFetchError) as exc_info:
            fetch_forecast(45.5, -122.6, settings=SETTINGS)

        assert exc_info.value.status_code == 401
        assert "Invalid API key" in exc_info.value.detail

    @patch("sitesense.datasources.weather.client.session.get")
    def test_non_2xx_empty_body(self, mock_get: Mock) -> None:
        mock_get.return_value = error_response(502, "")

        with pytest.raises(WeatherFetchError, match="Failed to fetch forecast"):
            fetch_forecast(45.5, -122.6, settings=SETTINGS)

    @patch("sitesense.datasources.weather.client.session.get")
    def test_transport_error_wrapped(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(WeatherFetchError) as exc_info:
            fetch_forecast(45.5, -122.6, settings=SETTINGS)

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    @patch("sitesense.datasources.weather.client.session.get")
    def test_invalid_json(self, mock_get: Mock) -> None:
        resp = Mock(ok=True, status_code=200)
        resp.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = resp

        with pytest.raises(WeatherFetchError, match="Invalid JSON"):
            fetch_forecast(45.5, -122.6, settings=SETTINGS)

    @patch("sitesense.datasources.weather.client.session.get")
    def test_raw_body_for_caching(self, mock_get: Mock) -> None:
        mock_get.return_value = ok_response(FORECAST_BODY)
        assert fetch_forecast_raw(45.5, -122.6, settings=SETTINGS) == FORECAST_BODY

    @patch("sitesense.datasources.weather.client.session.get")
    def test_raw_non_dict_body(self, mock_get: Mock) -> None:
        mock_get.return_value = ok_response(["unexpected"])
        assert fetch_forecast_raw(45.5, -122.6, settings=SETTINGS) == {}


class TestFetchCurrent:
    """Current-conditions fetcher."""

    @patch("sitesense.datasources.weather.client.session.get")
    def test_normalizes_payload(self, mock_get: Mock) -> None:
        mock_get.return_value = ok_response(
            {"weather": [{"main": "Clear", "description": "clear sky"}], "main": {"temp": 71.5}}
        )

        current = fetch_current(45.5, -122.6, settings=SETTINGS)

        assert mock_get.call_args.args[0].endswith("/weather")
        assert current.conditions == "Clear"
        assert current.temperature == 72
        assert current.location == "45.50, -122.60"

    @patch("sitesense.datasources.weather.client.session.get")
    def test_error(self, mock_get: Mock) -> None:
        mock_get.return_value = error_response(500, "")

        with pytest.raises(WeatherFetchError, match="Failed to fetch weather data"):
            fetch_current(45.5, -122.6, settings=SETTINGS)
