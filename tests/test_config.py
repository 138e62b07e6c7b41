import os
import unittest
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from app.config import Settings


class _EnvOverride:
    """Temporarily set (or clear, with None) environment variables."""

    def __init__(self, **values):
        self.values = values
        self.previous = {}

    def __enter__(self):
        for key, value in self.values.items():
            self.previous[key] = os.environ.get(key)
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        return self

    def __exit__(self, *exc):
        for key, value in self.previous.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value


class TestConfig(unittest.TestCase):
    def test_settings_defaults(self):
        with _EnvOverride(
            WEATHER_OPENWEATHER_API_KEY=None,
            WEATHER_OPENWEATHER_BASE_URL=None,
            WEATHER_DISPLAY_TIMEZONE=None,
            WEATHER_FORECAST_DAYS=None,
        ):
            s = Settings()
            self.assertIsNone(s.openweather_api_key)
            self.assertEqual(s.openweather_base_url, "https://api.openweathermap.org/data/2.5")
            self.assertEqual(s.units, "metric")
            self.assertEqual(s.forecast_days, 5)
            self.assertIsNone(s.tzinfo())

    def test_api_key_env_override(self):
        with _EnvOverride(WEATHER_OPENWEATHER_API_KEY=" abc123 "):
            self.assertEqual(Settings().openweather_api_key, "abc123")

    def test_blank_api_key_is_none(self):
        with _EnvOverride(WEATHER_OPENWEATHER_API_KEY="   "):
            self.assertIsNone(Settings().openweather_api_key)

    def test_base_url_trailing_slash_stripped(self):
        with _EnvOverride(WEATHER_OPENWEATHER_BASE_URL="http://example.com/data/2.5/"):
            self.assertEqual(Settings().openweather_base_url, "http://example.com/data/2.5")

    def test_display_timezone(self):
        with _EnvOverride(WEATHER_DISPLAY_TIMEZONE="Europe/Oslo"):
            self.assertEqual(Settings().tzinfo(), ZoneInfo("Europe/Oslo"))

    def test_timeout_must_be_positive(self):
        for bad in ("0", "-1", "61"):
            with self.subTest(value=bad), _EnvOverride(WEATHER_HTTP_TIMEOUT_SECONDS=bad):
                with self.assertRaises(ValidationError):
                    Settings()

    def test_forecast_days_bounded(self):
        for bad in ("0", "6"):
            with self.subTest(value=bad), _EnvOverride(WEATHER_FORECAST_DAYS=bad):
                with self.assertRaises(ValidationError):
                    Settings()
        with _EnvOverride(WEATHER_FORECAST_DAYS="3"):
            self.assertEqual(Settings().forecast_days, 3)

    def test_unknown_timezone_rejected(self):
        with _EnvOverride(WEATHER_DISPLAY_TIMEZONE="Not/AZone"):
            with self.assertRaises(ValidationError):
                Settings()


if __name__ == "__main__":
    unittest.main()
