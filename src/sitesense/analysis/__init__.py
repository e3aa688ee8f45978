"""Pure transforms over datasource models.

Dependency rule: analysis/ imports models only. It never fetches data,
touches the store, or produces HTML.

Modules:
  - daily_forecast: 3-hourly forecast entries -> per-day summaries
"""

from sitesense.analysis.daily_forecast import (
    MAX_FORECAST_DAYS,
    DailyForecast,
    aggregate,
    today_high_low,
)

__all__ = ["MAX_FORECAST_DAYS", "DailyForecast", "aggregate", "today_high_low"]
