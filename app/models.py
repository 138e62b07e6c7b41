"""Pydantic response schemas for the weather HTTP API."""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel

from app.data_sources.openweather_client import WeatherSample
from app.presentation import format_sample_time, gradient_category_for, is_night_sample


class SampleOut(BaseModel):
    """One normalized sample plus the display hints derived from it."""
    city: str
    country: str
    temperature: float
    feels_like: float
    humidity: float
    wind_speed: float
    description: str
    icon: str
    category: str
    dt: int
    is_night: bool
    gradient: str
    day_label: str
    time_label: str
    full_label: str

    @classmethod
    def from_sample(cls, sample: WeatherSample, tz: Optional[dt.tzinfo] = None) -> "SampleOut":
        night = is_night_sample(sample.icon)
        return cls(
            city=sample.city,
            country=sample.country,
            temperature=sample.temperature,
            feels_like=sample.feels_like,
            humidity=sample.humidity,
            wind_speed=sample.wind_speed,
            description=sample.description,
            icon=sample.icon,
            category=sample.category,
            dt=sample.dt,
            is_night=night,
            gradient=gradient_category_for(sample.category, night),
            day_label=format_sample_time(sample.dt, "day", tz),
            time_label=format_sample_time(sample.dt, "time", tz),
            full_label=format_sample_time(sample.dt, "full", tz),
        )


class WeatherResponse(BaseModel):
    """Current conditions and the daily outlook for a searched city."""
    query: str
    city: str
    country: str
    generation: int
    current: SampleOut
    daily: list[SampleOut]


class ErrorDetail(BaseModel):
    """Body of every error the API raises for a failed lookup."""
    error: str
    message: str
