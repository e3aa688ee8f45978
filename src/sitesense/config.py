"""
Application settings.

Values come from environment variables prefixed with ``SITESENSE_`` (or a
local ``.env`` file), e.g. ``SITESENSE_WEATHER_API_KEY=...``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SITESENSE_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "sitesense"
    app_env: str = "development"
    debug: bool = False

    # Default field site (used when no coordinates are given)
    lat: float = Field(default=45.5, ge=-90, le=90)
    lon: float = Field(default=-122.6, ge=-180, le=180)

    api_port: int = 8000
    data_dir: Path = Path("data")

    # OpenWeather-compatible API
    weather_api_base: str = "https://api.openweathermap.org/data/2.5"
    weather_api_key: str = ""
    weather_units: str = "imperial"

    # IP geolocation fallback
    geolocation_url: str = "http://ip-api.com/json/"
    geolocation_timeout: float = 8.0

    preview_refresh_minutes: int = 30


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (read once)."""
    return Settings()
