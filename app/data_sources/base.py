"""Interfaces and helpers for weather data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from app.data_sources.openweather_client import ForecastBundle, WeatherSample


class WeatherDataSource(Protocol):
    """Interface for anything that can resolve a city name to weather data."""

    def fetch_current(self, city: str) -> WeatherSample:
        """Return current conditions for the city."""
        ...

    def fetch_forecast(self, city: str) -> ForecastBundle:
        """Return the forecast bundle for the city."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap two callables so they can stand in for a real client."""

    current: Callable[[str], WeatherSample]
    forecast: Callable[[str], ForecastBundle]

    def fetch_current(self, city: str) -> WeatherSample:
        """Delegate to the configured current-conditions callable."""
        return self.current(city)

    def fetch_forecast(self, city: str) -> ForecastBundle:
        """Delegate to the configured forecast callable."""
        return self.forecast(city)
