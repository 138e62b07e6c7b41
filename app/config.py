"""Application configuration pulled from environment variables via pydantic."""
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the city weather service."""
    model_config = SettingsConfigDict(env_prefix="WEATHER_", extra="ignore")

    openweather_api_key: str | None = None
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    units: str = "metric"
    http_timeout_seconds: float | None = Field(default=10.0, gt=0, le=60.0)  # None: no timeout
    display_timezone: str | None = None  # None: the server's local time
    forecast_days: int = Field(default=5, ge=1, le=5)  # the provider forecast spans 5 days
    log_level: str = "INFO"

    @field_validator("openweather_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("openweather_api_key", mode="after")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty/whitespace key the same as an unset one."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("display_timezone", mode="after")
    @classmethod
    def known_timezone(cls, v: str | None) -> str | None:
        """Reject timezone names zoneinfo cannot resolve."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{v}'") from exc
        return v

    def tzinfo(self) -> ZoneInfo | None:
        """Timezone used for calendar days and hours, or None for local time."""
        return ZoneInfo(self.display_timezone) if self.display_timezone else None


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'openweather_api_key'})}")
