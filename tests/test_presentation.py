import datetime as dt
import unittest
from zoneinfo import ZoneInfo

from app.presentation import format_sample_time, gradient_category_for, is_night_sample


class TestNightSample(unittest.TestCase):
    def test_night_icon(self):
        self.assertTrue(is_night_sample("10n"))

    def test_day_icon(self):
        self.assertFalse(is_night_sample("10d"))

    def test_empty_icon(self):
        self.assertFalse(is_night_sample(""))


class TestGradientCategory(unittest.TestCase):
    def test_rain(self):
        self.assertEqual(gradient_category_for("Rain", False), "rain")

    def test_night_overrides_category(self):
        self.assertEqual(gradient_category_for("Clear", True), "night")
        self.assertEqual(gradient_category_for("Thunderstorm", True), "night")

    def test_collapsed_groups(self):
        self.assertEqual(gradient_category_for("Drizzle"), "rain")
        for category in ("Mist", "Fog", "Haze"):
            self.assertEqual(gradient_category_for(category), "mist")

    def test_direct_groups(self):
        self.assertEqual(gradient_category_for("Clear"), "clear")
        self.assertEqual(gradient_category_for("Clouds"), "clouds")
        self.assertEqual(gradient_category_for("Thunderstorm"), "thunderstorm")
        self.assertEqual(gradient_category_for("Snow"), "snow")

    def test_unknown_defaults_to_clear(self):
        self.assertEqual(gradient_category_for("Tornado"), "clear")
        self.assertEqual(gradient_category_for("Smoke"), "clear")


class TestFormatSampleTime(unittest.TestCase):
    def setUp(self):
        # Monday 2024-01-01 15:05 UTC
        self.ts = int(dt.datetime(2024, 1, 1, 15, 5, tzinfo=ZoneInfo("UTC")).timestamp())
        self.tz = ZoneInfo("UTC")

    def test_day(self):
        self.assertEqual(format_sample_time(self.ts, "day", self.tz), "Mon")

    def test_time(self):
        self.assertEqual(format_sample_time(self.ts, "time", self.tz), "3:05 PM")

    def test_full(self):
        self.assertEqual(format_sample_time(self.ts, "full", self.tz), "Monday, Jan 1, 3:05 PM")

    def test_midnight_is_twelve_am(self):
        ts = int(dt.datetime(2024, 1, 1, 0, 0, tzinfo=self.tz).timestamp())
        self.assertEqual(format_sample_time(ts, "time", self.tz), "12:00 AM")

    def test_unknown_style(self):
        with self.assertRaises(ValueError):
            format_sample_time(self.ts, "iso", self.tz)


if __name__ == "__main__":
    unittest.main()
