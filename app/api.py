"""HTTP API for city weather lookups."""

from fastapi import APIRouter, HTTPException, Query, status

from .config import settings
from .data_sources import build_data_source
from .errors import (
    CityNotFound,
    InvalidCredential,
    MalformedResponse,
    MissingCredential,
    NetworkFailure,
    ProviderError,
    SearchSuperseded,
    WeatherServiceError,
)
from .models import ErrorDetail, SampleOut, WeatherResponse
from .search_manager import SearchCoordinator, WeatherReport
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

router = APIRouter()
DATA_SOURCE = build_data_source(settings)
COORDINATOR = SearchCoordinator(DATA_SOURCE, tz=settings.tzinfo(), max_days=settings.forecast_days)

STATUS_BY_ERROR = {
    MissingCredential: status.HTTP_503_SERVICE_UNAVAILABLE,
    InvalidCredential: status.HTTP_502_BAD_GATEWAY,
    CityNotFound: status.HTTP_404_NOT_FOUND,
    ProviderError: status.HTTP_502_BAD_GATEWAY,
    MalformedResponse: status.HTTP_502_BAD_GATEWAY,
    NetworkFailure: status.HTTP_504_GATEWAY_TIMEOUT,
    SearchSuperseded: status.HTTP_409_CONFLICT,
}


def _error_to_http(exc: WeatherServiceError) -> HTTPException:
    """Translate a weather error into an HTTPException with a distinct status and code."""
    code = STATUS_BY_ERROR.get(type(exc), status.HTTP_502_BAD_GATEWAY)
    detail = ErrorDetail(error=exc.code, message=exc.user_message)
    return HTTPException(status_code=code, detail=detail.model_dump())


def _to_response(report: WeatherReport) -> WeatherResponse:
    """Convert a WeatherReport into the serialized API shape."""
    tz = COORDINATOR.tz
    return WeatherResponse(
        query=report.city_query,
        city=report.current.city,
        country=report.current.country,
        generation=report.generation,
        current=SampleOut.from_sample(report.current, tz),
        daily=[SampleOut.from_sample(s, tz) for s in report.daily],
    )


@router.get("/weather", response_model=WeatherResponse)
def get_weather(city: str = Query(..., max_length=200)):
    """Search a city and return current conditions plus the daily outlook."""
    if not city.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=ErrorDetail(error="empty_city", message="Enter a city name to search.").model_dump(),
        )

    try:
        report = COORDINATOR.search(city)
    except WeatherServiceError as exc:
        logger.info(f"Weather lookup for '{city}' failed: {exc.code}", extra={"error": str(exc)})
        raise _error_to_http(exc) from exc

    return _to_response(report)


@router.get("/weather/latest", response_model=WeatherResponse)
def get_latest_weather():
    """Return the result of the most recent search that completed without being superseded."""
    report = COORDINATOR.latest
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=ErrorDetail(error="no_search", message="No search has completed yet.").model_dump(),
        )
    return _to_response(report)
