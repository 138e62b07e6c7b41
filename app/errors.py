"""Error taxonomy for weather lookups.

Each class carries a stable `code` and a `user_message` so the HTTP layer can
tell a bad credential apart from an unknown city or a generic provider fault.
"""
from __future__ import annotations


class WeatherServiceError(Exception):
    """Base class for every failure surfaced by the weather client."""
    code = "weather_error"
    user_message = "Something went wrong while fetching weather data."


class MissingCredential(WeatherServiceError):
    """No provider API key is configured."""
    code = "missing_credential"
    user_message = "No weather API key is configured."

    def __init__(self, message: str = "OpenWeatherMap API key is not configured"):
        super().__init__(message)


class InvalidCredential(WeatherServiceError):
    """The provider rejected the API key (HTTP 401)."""
    code = "invalid_credential"
    user_message = "The weather API key was rejected. Check that it is valid and activated."


class CityNotFound(WeatherServiceError):
    """The provider could not resolve the city (HTTP 404)."""
    code = "city_not_found"

    def __init__(self, city: str, message: str | None = None):
        super().__init__(message or f"City not found: {city}")
        self.city = city

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return (
            f'Could not find weather data for "{self.city}". '
            "Please check the city name and try again."
        )


class ProviderError(WeatherServiceError):
    """Any other non-success response, carrying the provider's own message."""
    code = "provider_error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"The weather provider returned an error: {self.message}"


class MalformedResponse(WeatherServiceError):
    """A response body could not be parsed into the expected structure."""
    code = "malformed_response"
    user_message = "The weather provider sent data we could not understand."


class NetworkFailure(WeatherServiceError):
    """Transport-level failure: unreachable host, DNS, timeout, reset connection."""
    code = "network_failure"
    user_message = "Could not reach the weather provider. Check your connection and try again."


class SearchSuperseded(WeatherServiceError):
    """A newer search started while this one was in flight."""
    code = "search_superseded"
    user_message = "A newer search replaced this one."
