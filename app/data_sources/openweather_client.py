"""Client for the OpenWeatherMap current-conditions and 5-day/3-hour forecast APIs."""
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import Any, List, Optional
from urllib.parse import urlencode

import requests

from app.errors import (
    CityNotFound,
    InvalidCredential,
    MalformedResponse,
    MissingCredential,
    NetworkFailure,
    ProviderError,
)
from utils.logging_utils import get_tagged_logger, mask_url_secrets
logger = get_tagged_logger(__name__, tag="openweather_client")

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
CURRENT_ENDPOINT = "weather"
FORECAST_ENDPOINT = "forecast"


@dataclass(frozen=True)
class WeatherSample:
    """Normalized conditions at one point in time."""
    city: str
    country: str
    temperature: float  # °C with metric units
    feels_like: float
    humidity: float  # %
    wind_speed: float  # m/s with metric units
    description: str
    icon: str
    category: str  # provider "main" group, e.g. "Clouds"
    dt: int  # unix seconds


@dataclass(frozen=True)
class ForecastBundle:
    """Forecast samples for the city the provider resolved the query to."""
    city: str
    country: str
    samples: List[WeatherSample] = field(default_factory=list)


@dataclass(frozen=True)
class ClientConfig:
    """Everything a client needs to talk to the provider; one per client instance."""
    api_key: Optional[str]
    base_url: str = OPENWEATHER_BASE_URL
    units: str = "metric"
    timeout: Optional[float] = 10.0


def _finite(value: Any, name: str) -> float:
    """Coerce a numeric field to float, rejecting NaN/inf and non-numbers."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"Field '{name}' is not a number: {value!r}")
    if not math.isfinite(value):
        raise MalformedResponse(f"Field '{name}' is not finite: {value!r}")
    return float(value)


def _text(value: Any, name: str) -> str:
    """Require a string field; null or other JSON types are malformed."""
    if not isinstance(value, str):
        raise MalformedResponse(f"Field '{name}' is not a string: {value!r}")
    return value


def _timestamp(value: Any) -> int:
    """Require an integral unix timestamp that the platform can represent."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponse(f"Field 'dt' is not a number: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise MalformedResponse(f"Field 'dt' is not a whole number of seconds: {value!r}")
    try:
        dt.datetime.fromtimestamp(value, dt.timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedResponse(f"Field 'dt' is out of range: {value!r}") from exc
    return int(value)


def _country(container: Any) -> str:
    """Country code from a `sys`/`city` object; absent means empty, null or non-string is malformed."""
    if container is None:
        return ""
    if not isinstance(container, dict):
        raise MalformedResponse(f"Expected an object holding 'country', got {container!r}")
    if "country" not in container:
        return ""
    return _text(container["country"], "country")


def _provider_message(resp) -> Optional[str]:
    """Pull the provider's `message` out of an error body, falling back to raw text."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = (getattr(resp, "text", "") or "").strip()
    if text:
        return text
    return getattr(resp, "reason", None) or None


def _parse_sample(entry: dict, *, city: str, country: str) -> WeatherSample:
    """Map one provider record (current body or forecast list item) to a WeatherSample."""
    try:
        main = entry["main"]
        condition = entry["weather"][0]
        return WeatherSample(
            city=city,
            country=country,
            temperature=_finite(main["temp"], "main.temp"),
            feels_like=_finite(main["feels_like"], "main.feels_like"),
            humidity=_finite(main["humidity"], "main.humidity"),
            wind_speed=_finite(entry["wind"]["speed"], "wind.speed"),
            description=_text(condition["description"], "weather.description"),
            icon=_text(condition["icon"], "weather.icon"),
            category=_text(condition["main"], "weather.main"),
            dt=_timestamp(entry["dt"]),
        )
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponse(f"Unexpected weather record shape: {type(exc).__name__}: {exc}") from exc


class OpenWeatherClient:
    """
    Fetch and normalize OpenWeatherMap data for a city name.

    The credential lives in the client's ClientConfig, so differently-configured
    clients can coexist. No retries or caching: every failure is raised to the
    caller as one of the classes in app.errors.
    """

    def __init__(self, config: ClientConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or requests.Session()

    def _get(self, endpoint: str, city: str) -> dict:
        """Issue one GET and classify the outcome; returns the decoded JSON object."""
        if not self.config.api_key:
            raise MissingCredential()

        url = f"{self.config.base_url.rstrip('/')}/{endpoint}"
        params = {"q": city, "appid": self.config.api_key, "units": self.config.units}
        logger.debug("Requesting OpenWeatherMap", extra={"url": mask_url_secrets(f"{url}?{urlencode(params)}")})

        try:
            resp = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.RequestException as exc:
            logger.warning("OpenWeatherMap unreachable", extra={"endpoint": endpoint, "error": str(exc)})
            raise NetworkFailure(f"Request to {endpoint} failed: {type(exc).__name__}: {exc}") from exc

        status = resp.status_code
        if status == 401:
            raise InvalidCredential(_provider_message(resp) or "Invalid API key")
        if status == 404:
            raise CityNotFound(city, _provider_message(resp))
        if not 200 <= status < 300:
            message = _provider_message(resp) or f"HTTP {status}"
            logger.warning("OpenWeatherMap error", extra={"endpoint": endpoint, "status": status, "provider_message": message})
            raise ProviderError(message, status_code=status)

        try:
            data = resp.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response from {endpoint} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise MalformedResponse(f"Response from {endpoint} is not a JSON object")
        return data

    def fetch_current(self, city: str) -> WeatherSample:
        """Fetch current conditions for `city` as resolved by the provider."""
        data = self._get(CURRENT_ENDPOINT, city)
        try:
            name = _text(data["name"], "name")
            country = _country(data.get("sys"))
        except KeyError as exc:
            raise MalformedResponse(f"Current conditions missing city metadata: {exc}") from exc

        sample = _parse_sample(data, city=name, country=country)
        logger.info("Fetched current conditions", extra={"city": name, "country": country})
        return sample

    def fetch_forecast(self, city: str) -> ForecastBundle:
        """Fetch the 3-hourly forecast list, stamping every sample with the resolved city."""
        data = self._get(FORECAST_ENDPOINT, city)
        try:
            name = _text(data["city"]["name"], "city.name")
            country = _country(data["city"])
            entries = data["list"]
        except (KeyError, TypeError) as exc:
            raise MalformedResponse(f"Forecast missing city header or list: {exc}") from exc
        if not isinstance(entries, list):
            raise MalformedResponse("Forecast 'list' is not an array")

        samples: List[WeatherSample] = []
        for entry in entries:
            sample = _parse_sample(entry, city=name, country=country)
            if samples and sample.dt <= samples[-1].dt:
                raise MalformedResponse(
                    f"Forecast timestamps out of order: {sample.dt} after {samples[-1].dt}"
                )
            samples.append(sample)

        logger.info("Fetched forecast", extra={"city": name, "country": country, "samples": len(samples)})
        return ForecastBundle(city=name, country=country, samples=samples)
