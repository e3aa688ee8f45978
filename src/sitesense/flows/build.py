"""
Prefect flow for building the static weather page from stored data.

Run locally:
    python -m sitesense.flows.build
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, task
from pydantic import ValidationError

from sitesense.analysis.daily_forecast import aggregate, today_high_low
from sitesense.config import get_settings
from sitesense.datasources.weather import parse_forecast
from sitesense.preview import WeatherPreview
from sitesense.renderers import render_template
from sitesense.renderers.forecast import build_header_preview_html, build_weather_widget_html
from sitesense.schemas import Coordinates, CurrentConditions
from sitesense.store import DataStore

store = DataStore(get_settings().data_dir)
SITE_DIR = store.derived / "site"

# Paths matching what fetch.py writes
FORECAST_PATH = Path("live/forecast.json")
CURRENT_PATH = Path("live/current.json")
ERRORS_PATH = Path("live/fetch_errors.json")


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-forecast")
def load_forecast() -> dict[str, Any] | None:
    """Load the forecast envelope (meta + data) from store."""
    return store.read_raw(FORECAST_PATH)


@task(name="load-current")
def load_current() -> CurrentConditions | None:
    """Load stored current conditions, None if missing or unreadable."""
    data = store.read(CURRENT_PATH)
    if not isinstance(data, dict):
        return None
    try:
        return CurrentConditions.model_validate(data)
    except ValidationError:
        print("Warning: stored current conditions are malformed, ignoring.")
        return None


@task(name="load-errors")
def load_errors() -> dict[str, str]:
    """Load fetch errors recorded by the last fetch run."""
    data = store.read(ERRORS_PATH)
    return data if isinstance(data, dict) else {}


# =============================================================================
# Main build task and flow
# =============================================================================


def _updated_label(envelope: dict[str, Any] | None) -> str:
    fetched_at = (envelope or {}).get("meta", {}).get("fetched_at", "")
    if not fetched_at:
        return "never"
    return datetime.fromisoformat(fetched_at).astimezone().strftime("%Y-%m-%d %H:%M")


def _preview_from(
    envelope: dict[str, Any] | None, current: CurrentConditions | None
) -> WeatherPreview | None:
    if envelope is None or current is None:
        return None
    location = envelope.get("meta", {}).get("location") or {}
    try:
        coords = Coordinates.model_validate(location)
    except ValidationError:
        return None
    high, low = today_high_low(parse_forecast(envelope.get("data")))
    return WeatherPreview(
        conditions=current.conditions,
        high=high,
        low=low,
        coords=coords,
        fetched_at=datetime.fromisoformat(envelope["meta"]["fetched_at"]),
    )


@task(name="build-html")
def build_html(
    forecast_envelope: dict[str, Any] | None,
    current: CurrentConditions | None,
    errors: dict[str, str] | None = None,
) -> str:
    """Build the weather page from the stored forecast and current conditions."""
    errors = errors or {}
    days = aggregate(parse_forecast((forecast_envelope or {}).get("data")))

    widget_html = build_weather_widget_html(
        current,
        days,
        error=errors.get("current_error") or "Current conditions not available.",
        forecast_error=errors.get("forecast_error"),
    )
    header_html = build_header_preview_html(_preview_from(forecast_envelope, current))

    return render_template(
        "base.html.j2",
        title=get_settings().app_name,
        updated=_updated_label(forecast_envelope),
        header_preview=header_html,
        weather_widget=widget_html,
    )


@task(name="write-site")
def write_site(html: str) -> Path:
    """Write HTML to site directory."""
    SITE_DIR.mkdir(parents=True, exist_ok=True)
    output_path = SITE_DIR / "index.html"
    with output_path.open("w") as f:
        f.write(html)
    return output_path


@flow(name="build-site", log_prints=True)
def build_all() -> dict[str, Any]:
    """
    Build the static weather page from fetched data.

    This is the main Prefect flow that generates the site.
    """
    print("Loading forecast...")
    forecast = load_forecast()
    if not forecast:
        print("No forecast data found. Run fetch flow first.")
        return {"error": "no data"}

    print("Loading current conditions...")
    current = load_current()
    if current is None:
        print("Warning: No current conditions found. Building without them.")

    errors = load_errors()
    for name, detail in errors.items():
        print(f"Warning: last fetch reported {name}: {detail}")

    print("Building HTML...")
    html = build_html(forecast, current, errors)

    print("Writing site...")
    output_path = write_site(html)

    print(f"Site built: {output_path}")
    return {"pages": 1, "output": str(output_path)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
