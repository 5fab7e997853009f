from typing import List

import structlog
from fastapi import APIRouter, Query

from assistant.weather_assistant import weather_assistant
from src.models.outcome.outcome import ForecastOutcome, WeatherOutcome
from src.utils.weather_codes import get_weather_description

logger = structlog.get_logger(__name__)

# Create router
router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("/current/{location}", response_model=WeatherOutcome, summary="Get Current Weather")
async def get_current_weather(location: str):
    """
    Get current weather for a place name.

    The place is geocoded first and the weather for its first match is
    fetched afterwards. Failures are reported in the body rather than as
    HTTP errors.

    Args:
        location: Place name to look up.

    Returns:
        WeatherOutcome with the weather info or a failure message and code.
    """
    logger.info("API request: Get current weather", location=location)
    return await weather_assistant.get_weather_by_location(location)


@router.get("/forecast", response_model=ForecastOutcome, summary="Get Multi-Day Forecast")
async def get_forecast(
    latitude: float = Query(..., ge=-90, le=90, description="Latitude"),
    longitude: float = Query(..., ge=-180, le=180, description="Longitude"),
    days: int = Query(default=5, ge=1, le=16, description="Number of forecast days"),
):
    """
    Get a multi-day forecast for a pair of coordinates.

    Unless the live forecast is enabled, the response is the fixed
    placeholder series and is flagged with ``stub: true``.
    """
    logger.info("API request: Get forecast", latitude=latitude, longitude=longitude, days=days)
    return await weather_assistant.get_multi_day_forecast(latitude, longitude, days)


@router.get("/codes/{code}", summary="Describe Weather Code")
async def describe_weather_code(code: int):
    """Get the description of a weather code."""
    return {"code": code, "description": get_weather_description(code)}


@router.get("/recent-searches", response_model=List[str], summary="Get Recent Searches")
async def get_recent_searches():
    """Get suggested locations to search for."""
    return weather_assistant.get_recent_searches()
