"""Weather display helpers for renderers.

Pure conversion functions with no external dependencies.
"""

from __future__ import annotations

import math

# 16-point compass, clockwise from north
COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)  # fmt: skip

MISSING = "--"
NO_DIRECTION = "—"


def condition_icon(conditions: str) -> str:
    """Map a condition label to an icon category.

    Returns one of ``rain``, ``wind``, ``clear`` or ``cloud`` (the default).
    """
    normalized = conditions.lower()
    if any(word in normalized for word in ("rain", "shower", "drizzle")):
        return "rain"
    if "wind" in normalized:
        return "wind"
    if "clear" in normalized or "sun" in normalized:
        return "clear"
    return "cloud"


def wind_direction(degrees: float | None) -> str:
    """Compass direction for a wind bearing in degrees, or an em dash."""
    if degrees is None or isinstance(degrees, bool) or not math.isfinite(degrees):
        return NO_DIRECTION
    index = math.floor(degrees / 22.5 + 0.5) % 16
    return COMPASS_POINTS[index]


def display_value(value: int | None) -> str:
    """Render an optional number, ``--`` when missing."""
    return MISSING if value is None else str(value)
