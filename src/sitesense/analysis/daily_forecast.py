"""Bucket timestamped forecast entries into per-day summaries.

The upstream forecast is a flat list of 3-hourly points. The weather widget
shows one card per calendar day with the high/low temperature, the highest
chance of precipitation, and a sky-condition label. Day boundaries follow
the local timezone of the running process unless a site timezone is given.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import TYPE_CHECKING

from sitesense.schemas import UNKNOWN_CONDITION, finite_or_none, round_half_up

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sitesense.schemas import ForecastEntry

MAX_FORECAST_DAYS = 7


@dataclass
class DailyForecast:
    """Aggregated forecast for one calendar day."""

    day: date
    day_label: str
    high_temperature: int | None
    low_temperature: int | None
    precipitation_percent: int | None
    condition_label: str


@dataclass
class _DayAccumulator:
    day: date
    condition_label: str | None
    temperatures: list[float] = field(default_factory=list)
    precipitation: list[float] = field(default_factory=list)


def local_day(timestamp: int, tz: tzinfo | None = None) -> date | None:
    """Calendar date of a Unix timestamp in ``tz`` (process-local when None).

    Returns None for timestamps the platform cannot represent (e.g. a
    millisecond value passed as seconds).
    """
    try:
        if tz is None:
            return datetime.fromtimestamp(timestamp).date()
        return datetime.fromtimestamp(timestamp, tz).date()
    except (OverflowError, OSError, ValueError):
        return None


def aggregate(
    entries: Iterable[ForecastEntry],
    *,
    tz: tzinfo | None = None,
    max_days: int = MAX_FORECAST_DAYS,
) -> list[DailyForecast]:
    """
    Group forecast entries by calendar day and summarize each day.

    Days come out in the order they are first seen in ``entries`` (not
    sorted by date), truncated to ``max_days``. Entries without a usable timestamp
    are skipped; non-finite temperatures or probabilities are left out of
    their day's statistics. The condition label of a day is the one carried
    by the first entry seen for it.

    Args:
        entries: Forecast points, in upstream order.
        tz: Site timezone for day boundaries. None uses the local timezone.
        max_days: Maximum number of days to return.

    Returns:
        One DailyForecast per retained day.
    """
    days: dict[date, _DayAccumulator] = {}

    for entry in entries:
        if not entry.timestamp:
            continue
        key = local_day(entry.timestamp, tz)
        if key is None:
            continue
        acc = days.get(key)
        if acc is None:
            acc = _DayAccumulator(day=key, condition_label=entry.condition_label)
            days[key] = acc

        temperature = finite_or_none(entry.temperature)
        if temperature is not None:
            acc.temperatures.append(temperature)
        probability = finite_or_none(entry.precipitation_probability)
        if probability is not None:
            acc.precipitation.append(probability)

    return [_summarize(acc) for acc in list(days.values())[:max_days]]


def _summarize(acc: _DayAccumulator) -> DailyForecast:
    high = low = precip = None
    if acc.temperatures:
        high = round_half_up(max(acc.temperatures))
        low = round_half_up(min(acc.temperatures))
    if acc.precipitation:
        precip = min(100, max(0, round_half_up(max(acc.precipitation) * 100)))

    return DailyForecast(
        day=acc.day,
        day_label=acc.day.strftime("%a"),
        high_temperature=high,
        low_temperature=low,
        precipitation_percent=precip,
        condition_label=acc.condition_label or UNKNOWN_CONDITION,
    )


def today_high_low(
    entries: Iterable[ForecastEntry],
    *,
    today: date | None = None,
    tz: tzinfo | None = None,
) -> tuple[int | None, int | None]:
    """Rounded (high, low) over the entries that fall on ``today``.

    ``today`` defaults to the current date in ``tz`` (local when None).
    Returns ``(None, None)`` when no entry for today has a finite temperature.
    """
    if today is None:
        today = datetime.now(tz).date()

    temps: list[float] = []
    for entry in entries:
        if not entry.timestamp or local_day(entry.timestamp, tz) != today:
            continue
        temperature = finite_or_none(entry.temperature)
        if temperature is not None:
            temps.append(temperature)

    if not temps:
        return None, None
    return round_half_up(max(temps)), round_half_up(min(temps))
