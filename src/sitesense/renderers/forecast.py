"""Weather widget and header preview fragments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sitesense.renderers import render_template
from sitesense.renderers.weather_utils import condition_icon, display_value, wind_direction

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sitesense.analysis.daily_forecast import DailyForecast
    from sitesense.preview import WeatherPreview
    from sitesense.schemas import CurrentConditions


def _day_card(day: DailyForecast) -> dict[str, Any]:
    return {
        "label": day.day_label,
        "date": day.day.isoformat(),
        "icon": condition_icon(day.condition_label),
        "conditions": day.condition_label,
        "high": display_value(day.high_temperature),
        "low": display_value(day.low_temperature),
        "precip": display_value(day.precipitation_percent),
    }


def build_weather_widget_html(
    current: CurrentConditions | None,
    days: Sequence[DailyForecast],
    *,
    error: str | None = None,
    forecast_error: str | None = None,
) -> str:
    """
    Build the current-conditions card with the weekly forecast strip.

    Args:
        current: Current conditions, or None if unavailable.
        days: Aggregated daily forecast (at most 7 entries).
        error: Current-conditions fetch error, shown when ``current`` is None.
        forecast_error: Forecast fetch error, shown in place of the strip.
    """
    current_ctx = None
    if current is not None:
        current_ctx = {
            "conditions": current.conditions,
            "icon": condition_icon(current.conditions),
            "temperature": current.temperature,
            "humidity": current.humidity,
            "wind_speed": current.wind_speed,
            "wind_dir": wind_direction(current.wind_deg),
            "pressure": f"{current.pressure:g} mb" if current.pressure else "Pressure —",
            "description": current.description,
            "location": current.location,
        }

    return render_template(
        "weather_widget.html.j2",
        current=current_ctx,
        error=error,
        forecast_error=forecast_error,
        days=[_day_card(d) for d in days],
    )


def build_header_preview_html(preview: WeatherPreview | None) -> str:
    """Compact ``Clear 72° / 55°`` header line, or "Weather unavailable"."""
    ctx = None
    if preview is not None:
        ctx = {
            "conditions": preview.conditions,
            "icon": condition_icon(preview.conditions),
            "high": display_value(preview.high),
            "low": display_value(preview.low),
        }
    return render_template("header_preview.html.j2", preview=ctx)
