import os

import uvicorn

from app.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def warn_if_missing_key() -> None:
    """
    Log a clear message when no OpenWeatherMap key is set. The server still
    starts; searches answer 503 until WEATHER_OPENWEATHER_API_KEY is provided.
    """
    if not settings.openweather_api_key:
        logger.error("WEATHER_OPENWEATHER_API_KEY is not set; weather searches will fail.")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="city_weather")
    warn_if_missing_key()

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
