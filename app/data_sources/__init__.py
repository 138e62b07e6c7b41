"""Weather data sources and the factory that picks one at startup."""

from .base import CallableWeatherDataSource, WeatherDataSource
from .factory import build_data_source, client_config_from_settings
from .openweather_client import (
    ClientConfig,
    ForecastBundle,
    OpenWeatherClient,
    WeatherSample,
)

__all__ = [
    "build_data_source",
    "client_config_from_settings",
    "CallableWeatherDataSource",
    "WeatherDataSource",
    "ClientConfig",
    "ForecastBundle",
    "OpenWeatherClient",
    "WeatherSample",
]
