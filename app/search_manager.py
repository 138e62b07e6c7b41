"""Run city searches and keep only the newest search's result."""
from __future__ import annotations

import datetime as dt
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from app.data_sources.base import WeatherDataSource
from app.data_sources.openweather_client import WeatherSample
from app.errors import SearchSuperseded
from app.forecast_service import DEFAULT_MAX_DAYS, get_daily_forecast
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="search_manager")


@dataclass(frozen=True)
class WeatherReport:
    """Current conditions plus the daily outlook for one search."""
    city_query: str
    current: WeatherSample
    daily: List[WeatherSample] = field(default_factory=list)
    generation: int = 0


@dataclass(frozen=True)
class SearchToken:
    """Handle for one in-flight search; stale once a newer search begins."""
    generation: int
    coordinator: "SearchCoordinator"

    def is_current(self) -> bool:
        return self.coordinator.generation == self.generation


class SearchCoordinator:
    """
    Sequential current-then-forecast search with a generation counter.

    Every search bumps the generation. A search that finds itself outdated
    after a network call raises SearchSuperseded and never overwrites `latest`.
    """

    def __init__(
        self,
        source: WeatherDataSource,
        *,
        tz: Optional[dt.tzinfo] = None,
        max_days: int = DEFAULT_MAX_DAYS,
    ):
        self.source = source
        self.tz = tz
        self.max_days = max_days
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: Optional[WeatherReport] = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    @property
    def latest(self) -> Optional[WeatherReport]:
        with self._lock:
            return self._latest

    def begin(self) -> SearchToken:
        """Start a new search generation, invalidating any in flight."""
        with self._lock:
            self._generation += 1
            return SearchToken(generation=self._generation, coordinator=self)

    def _check(self, token: SearchToken, stage: str) -> None:
        if not token.is_current():
            logger.info("Search superseded", extra={"generation": token.generation, "stage": stage})
            raise SearchSuperseded(f"Search {token.generation} superseded after {stage}")

    def _apply(self, token: SearchToken, report: WeatherReport) -> None:
        with self._lock:
            if self._generation != token.generation:
                raise SearchSuperseded(f"Search {token.generation} superseded before apply")
            self._latest = report

    def search(self, city: str, *, today: Optional[dt.date] = None) -> WeatherReport:
        """Fetch current conditions, then the forecast, and aggregate the outlook."""
        query = (city or "").strip()
        if not query:
            raise ValueError("City name must not be empty")

        token = self.begin()
        logger.info("Starting search", extra={"city": query, "generation": token.generation})

        current = self.source.fetch_current(query)
        self._check(token, "current")

        bundle = self.source.fetch_forecast(query)
        self._check(token, "forecast")

        daily = get_daily_forecast(bundle.samples, today=today, tz=self.tz, max_days=self.max_days)
        report = WeatherReport(city_query=query, current=current, daily=daily, generation=token.generation)
        self._apply(token, report)

        logger.info(
            "Search complete",
            extra={"city": current.city, "country": current.country, "days": len(daily), "generation": token.generation},
        )
        return report
