"""Factory helpers for building the weather client at startup."""

from __future__ import annotations

from app import config
from app.data_sources.openweather_client import ClientConfig, OpenWeatherClient
from utils.logging_utils import get_tagged_logger, mask_url_secrets

logger = get_tagged_logger(__name__, tag="data_sources/factory")


def client_config_from_settings(settings: config.Settings | None = None) -> ClientConfig:
    """Translate Settings into the client's explicit configuration object."""
    settings = settings or config.settings
    return ClientConfig(
        api_key=settings.openweather_api_key,
        base_url=settings.openweather_base_url,
        units=settings.units,
        timeout=settings.http_timeout_seconds,
    )


def build_data_source(settings: config.Settings | None = None) -> OpenWeatherClient:
    """Instantiate the OpenWeatherMap client from settings.

    A missing key is not an error here; the client raises MissingCredential
    on its first request instead.
    """
    client_config = client_config_from_settings(settings)
    if not client_config.api_key:
        logger.warning("No OpenWeatherMap API key configured; lookups will fail until WEATHER_OPENWEATHER_API_KEY is set")
    logger.info("Using OpenWeatherMap data source", extra={"base_url": mask_url_secrets(client_config.base_url)})
    return OpenWeatherClient(client_config)
