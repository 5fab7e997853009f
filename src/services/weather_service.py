from typing import Any, Dict

import httpx
import structlog
from pydantic import ValidationError

from src.config.config import config
from src.exceptions.weather import APIRequestError, WeatherServiceError
from src.models.weather.forecast import DAILY_FORECAST_FIELDS, ForecastResponse
from src.models.weather.weather import CURRENT_WEATHER_FIELDS, OpenMeteoCurrentResponse
from src.utils.singleton import Singleton

logger = structlog.get_logger(__name__)


class WeatherService(Singleton):
    """
    Service for fetching weather data from the Open-Meteo forecast API.

    Unlike the geocoding service, failures are raised to the caller. There is
    no retry and no backoff.
    """

    def __init__(self):
        """Initialize the weather service."""
        super().__init__()

        if hasattr(self, "_weather_initialized"):
            return

        self.base_url = config.weather_base_url
        self.timeout = httpx.Timeout(config.request_timeout_seconds)

        self._weather_initialized = True

    async def _make_request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a single HTTP request to the forecast API.

        Args:
            params: Query parameters

        Returns:
            JSON response from the API

        Raises:
            APIRequestError: If the request could not be completed
            WeatherServiceError: For non-200 responses and unreadable bodies
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                logger.info("Making API request", url=self.base_url, params=params)
                response = await client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Request timeout", url=self.base_url)
            raise APIRequestError("Weather request timed out") from e
        except httpx.RequestError as e:
            logger.warning("Request error", url=self.base_url, error=str(e))
            raise APIRequestError(f"Request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.warning(
                "API request failed",
                status_code=response.status_code,
                response_text=response.text,
            )
            raise WeatherServiceError("Failed to fetch weather data")

        try:
            return response.json()
        except ValueError as e:
            raise WeatherServiceError(f"Invalid JSON in weather response: {str(e)}") from e

    async def fetch_current(self, latitude: float, longitude: float) -> OpenMeteoCurrentResponse:
        """
        Get current conditions for a pair of coordinates.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            OpenMeteoCurrentResponse with the current measurements and their units

        Raises:
            WeatherServiceError: If the request fails or the body is invalid
        """
        logger.info("Fetching current weather", latitude=latitude, longitude=longitude)
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_WEATHER_FIELDS),
        }
        data = await self._make_request(params)

        try:
            response = OpenMeteoCurrentResponse(**data)
        except (ValidationError, TypeError) as e:
            logger.error("Failed to parse weather data", latitude=latitude, longitude=longitude, error=str(e))
            raise WeatherServiceError(f"Invalid weather data received: {str(e)}") from e

        logger.info(
            "Successfully fetched current weather",
            latitude=latitude,
            longitude=longitude,
            weather_code=response.current.weather_code,
        )
        return response

    async def fetch_daily_forecast(self, latitude: float, longitude: float, days: int) -> ForecastResponse:
        """
        Get a daily forecast for a pair of coordinates.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            days: Number of forecast days, starting today

        Returns:
            ForecastResponse with one entry per day

        Raises:
            WeatherServiceError: If the request fails or the body is invalid
        """
        logger.info("Fetching daily forecast", latitude=latitude, longitude=longitude, days=days)
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "daily": ",".join(DAILY_FORECAST_FIELDS),
            "forecast_days": days,
            "timezone": "auto",
        }
        data = await self._make_request(params)

        try:
            return ForecastResponse(**data)
        except (ValidationError, TypeError) as e:
            logger.error("Failed to parse forecast data", latitude=latitude, longitude=longitude, error=str(e))
            raise WeatherServiceError(f"Invalid forecast data received: {str(e)}") from e


weather_service = WeatherService()
