"""Pure helpers the display layer uses to pick styling and labels for a sample."""
from __future__ import annotations

import datetime as dt
from typing import Optional

NIGHT_MARKER = "n"
NIGHT = "night"
DEFAULT_GRADIENT = "clear"

# Provider condition groups -> display gradient tag.
GRADIENT_BY_CATEGORY = {
    "clear": "clear",
    "clouds": "clouds",
    "rain": "rain",
    "drizzle": "rain",
    "thunderstorm": "thunderstorm",
    "snow": "snow",
    "mist": "mist",
    "fog": "mist",
    "haze": "mist",
}


def is_night_sample(icon_code: str) -> bool:
    """OpenWeatherMap icon codes end in "n" at night ("10n") and "d" by day."""
    return NIGHT_MARKER in (icon_code or "")


def gradient_category_for(category: str, is_night: bool = False) -> str:
    """Map a condition category to a gradient tag; night wins, unknown falls back to clear."""
    if is_night:
        return NIGHT
    return GRADIENT_BY_CATEGORY.get((category or "").lower(), DEFAULT_GRADIENT)


def format_sample_time(timestamp: int, style: str = "full", tz: Optional[dt.tzinfo] = None) -> str:
    """
    Render a unix timestamp for display.

    - "day":  "Mon"
    - "time": "3:00 PM"
    - "full": "Monday, Jan 1, 3:00 PM"
    """
    when = dt.datetime.fromtimestamp(timestamp, tz)
    clock = f"{when.hour % 12 or 12}:{when.minute:02d} {'AM' if when.hour < 12 else 'PM'}"
    if style == "day":
        return when.strftime("%a")
    if style == "time":
        return clock
    if style == "full":
        return f"{when.strftime('%A, %b')} {when.day}, {clock}"
    raise ValueError(f"Unknown time format style '{style}'")
