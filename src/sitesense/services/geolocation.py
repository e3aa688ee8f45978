"""Best-effort location lookup for the field device.

Uses an IP geolocation service (ip-api.com JSON format by default). This is
a fallback for when no site coordinates are known, so it uses a short fixed
deadline and no retries: any failure means "location unavailable".
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError

from sitesense.config import get_settings
from sitesense.schemas import Coordinates
from sitesense.services.http import NO_RETRY, create_session

logger = logging.getLogger(__name__)

#: Single attempt, no backoff: a failed lookup just means "unavailable".
session = create_session(retry=NO_RETRY)


def locate(url: str | None = None, timeout: float | None = None) -> Coordinates | None:
    """
    Look up approximate coordinates for this machine.

    Args:
        url: Geolocation endpoint (defaults to ``settings.geolocation_url``).
        timeout: Deadline in seconds (defaults to ``settings.geolocation_timeout``).

    Returns:
        Coordinates, or None on error, timeout, or an unusable response.
    """
    settings = get_settings()
    url = url or settings.geolocation_url
    timeout = timeout if timeout is not None else settings.geolocation_timeout

    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.info("Geolocation unavailable: %s", e)
        return None

    if not isinstance(data, dict) or data.get("status", "success") != "success":
        logger.info("Geolocation lookup failed: %s", data)
        return None

    try:
        return Coordinates(lat=data.get("lat"), lon=data.get("lon"))
    except ValidationError:
        logger.info("Geolocation response missing coordinates: %s", data)
        return None
