"""Tests for the IP geolocation fallback."""

from __future__ import annotations

from unittest.mock import Mock, patch

import requests

from sitesense.schemas import Coordinates
from sitesense.services import geolocation
from sitesense.services.geolocation import locate


def response(body: object) -> Mock:
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = body
    return resp


class TestLocate:
    @patch("sitesense.services.geolocation.session.get")
    def test_success(self, mock_get: Mock) -> None:
        mock_get.return_value = response({"status": "success", "lat": 45.52, "lon": -122.68})

        coords = locate(url="http://geo.example.test/json/", timeout=2.0)

        assert coords == Coordinates(lat=45.52, lon=-122.68)
        assert mock_get.call_args.args[0] == "http://geo.example.test/json/"
        assert mock_get.call_args.kwargs["timeout"] == 2.0

    @patch("sitesense.services.geolocation.session.get")
    def test_default_deadline_from_settings(self, mock_get: Mock) -> None:
        mock_get.return_value = response({"lat": 1.0, "lon": 2.0})

        locate()

        assert mock_get.call_args.kwargs["timeout"] == 8.0

    @patch("sitesense.services.geolocation.session.get")
    def test_timeout_is_unavailable(self, mock_get: Mock) -> None:
        mock_get.side_effect = requests.Timeout("read timed out")
        assert locate() is None

    @patch("sitesense.services.geolocation.session.get")
    def test_http_error_is_unavailable(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.raise_for_status.side_effect = requests.HTTPError("403")
        mock_get.return_value = resp
        assert locate() is None

    @patch("sitesense.services.geolocation.session.get")
    def test_failed_status(self, mock_get: Mock) -> None:
        mock_get.return_value = response({"status": "fail", "message": "private range"})
        assert locate() is None

    @patch("sitesense.services.geolocation.session.get")
    def test_missing_coordinates(self, mock_get: Mock) -> None:
        mock_get.return_value = response({"status": "success", "city": "Portland"})
        assert locate() is None

    @patch("sitesense.services.geolocation.session.get")
    def test_bad_json(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.raise_for_status.return_value = None
        resp.json.side_effect = ValueError("not json")
        mock_get.return_value = resp
        assert locate() is None


def test_lookup_session_does_not_retry() -> None:
    adapter = geolocation.session.get_adapter("http://ip-api.com/json/")
    assert adapter.max_retries.total == 0
