"""Reduce a 3-hourly forecast list to one representative sample per upcoming day."""
from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional, Sequence

from app.data_sources.openweather_client import WeatherSample
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="app/forecast_service")

DEFAULT_MAX_DAYS = 5
NOON_WINDOW = (12, 15)  # local hours, inclusive


def sample_local_time(sample: WeatherSample, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Sample timestamp as a datetime in `tz` (the process's local time when None)."""
    return dt.datetime.fromtimestamp(sample.dt, tz)


def _in_noon_window(local: dt.datetime) -> bool:
    """True for local hours 12 through 15."""
    start, end = NOON_WINDOW
    return start <= local.hour <= end


def get_daily_forecast(
    samples: Sequence[WeatherSample],
    *,
    today: Optional[dt.date] = None,
    tz: Optional[dt.tzinfo] = None,
    max_days: int = DEFAULT_MAX_DAYS,
) -> List[WeatherSample]:
    """
    Pick one sample per calendar day after `today`, for at most `max_days` days.

    Days are taken in the order they first appear in `samples` (the input is
    assumed time-ascending and is not re-sorted). For each day the first
    sample in the noon window wins; otherwise the day's first sample is used.
    `today` defaults to the current date in `tz`, so a fixed `today` makes the
    result a pure function of the input.
    """
    if today is None:
        today = dt.datetime.now(tz).date()

    by_day: Dict[dt.date, List[tuple[dt.datetime, WeatherSample]]] = {}
    for sample in samples:
        local = sample_local_time(sample, tz)
        day = local.date()
        if day == today:
            continue
        if day not in by_day:
            if len(by_day) >= max_days:
                continue
            by_day[day] = []
        by_day[day].append((local, sample))

    daily: List[WeatherSample] = []
    for day, entries in by_day.items():
        chosen = next((s for local, s in entries if _in_noon_window(local)), None)
        if chosen is None:
            chosen = entries[0][1]
            logger.debug("No noon-window sample; using first sample of day", extra={"day": day.isoformat()})
        daily.append(chosen)

    logger.debug(
        "Aggregated daily forecast",
        extra={"input_samples": len(samples), "days": len(daily), "today": today.isoformat()},
    )
    return daily
