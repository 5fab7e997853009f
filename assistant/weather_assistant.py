from datetime import date, datetime
from typing import List, Optional

import structlog

from src.config.config import config
from src.exceptions.weather import WeatherServiceError
from src.models.chat.chat_message import ChatMessage, ChatRole, create_chat_message
from src.models.outcome.outcome import FailureKind, ForecastOutcome, WeatherOutcome
from src.models.weather.forecast import DailyForecast, ForecastResponse
from src.models.weather.weather import WeatherInfo
from src.services.geocoding_service import GeocodingService, geocoding_service
from src.services.weather_service import WeatherService, weather_service
from src.utils.formatting import format_forecast, format_weather_details, generate_weather_summary
from src.utils.query_intent import extract_location_from_query, is_forecast_query
from src.utils.singleton import Singleton

logger = structlog.get_logger(__name__)

MIN_LOCATION_LENGTH = 2

INVALID_LOCATION_MESSAGE = "Please provide a valid location name (at least 2 characters)."
LOCATION_NOT_FOUND_MESSAGE = "Location not found. Please try with a different city or location name."
API_ERROR_MESSAGE = "Error fetching weather data. Please try again later."
NO_WEATHER_MESSAGE = "Sorry, I couldn't get the weather information."
NO_LOCATION_MESSAGE = "I couldn't determine which location you're asking about. Please specify a city or place."
NO_FORECAST_LOCATION_MESSAGE = (
    "I couldn't determine which location you want a forecast for. Please specify a city or place."
)
QUERY_FAILED_MESSAGE = "I encountered an error while processing your weather query. Please try again."

RECENT_SEARCHES = ["London", "New York", "Tokyo", "Paris", "Sydney"]

# Placeholder series returned while the forecast is not backed by a real call
PLACEHOLDER_FORECAST = DailyForecast(
    time=[date(2025, 3, 7), date(2025, 3, 8), date(2025, 3, 9), date(2025, 3, 10), date(2025, 3, 11)],
    temperature_2m_max=[12.4, 13.2, 14.5, 11.8, 12.9],
    temperature_2m_min=[8.1, 7.4, 9.3, 7.8, 6.5],
    precipitation_sum=[0.5, 1.2, 0, 0, 2.8],
    weather_code=[2, 61, 1, 0, 63],
)


class WeatherAssistant(Singleton):
    """
    Turns user text into weather answers.

    Geocoding always happens before the weather fetch, and both calls are
    awaited one after the other. Failures come back as outcome values and
    chat messages; nothing here raises to the caller.
    """

    def __init__(
        self,
        geocoding: Optional[GeocodingService] = None,
        weather: Optional[WeatherService] = None,
    ):
        """Initialize the weather assistant."""
        super().__init__()

        if hasattr(self, "_weather_assistant_initialized"):
            return

        self.geocoding_service = geocoding or geocoding_service
        self.weather_service = weather or weather_service
        self.forecast_days = config.default_forecast_days
        self.use_live_forecast = config.use_live_forecast

        self._weather_assistant_initialized = True
        logger.info("Weather Assistant has been initialized", live_forecast=self.use_live_forecast)

    async def get_weather_by_location(self, location: str) -> WeatherOutcome:
        """
        Get current weather for a place name.

        Args:
            location: Place name as typed by the user

        Returns:
            WeatherOutcome carrying WeatherInfo on success, or a user-facing
            message plus failure kind and error code otherwise
        """
        location = (location or "").strip()
        if len(location) < MIN_LOCATION_LENGTH:
            logger.info("Rejected location name", location=location)
            return WeatherOutcome.invalid(INVALID_LOCATION_MESSAGE)

        try:
            geocoding_response = await self.geocoding_service.lookup(location)
            match = geocoding_response.first_match()

            if match is None:
                logger.info("Location not found", location=location, reason=geocoding_response.reason)
                return WeatherOutcome.not_found(
                    LOCATION_NOT_FOUND_MESSAGE,
                    details=f"No coordinates found for location: {location}",
                )

            weather_response = await self.weather_service.fetch_current(match.latitude, match.longitude)
            weather_info = WeatherInfo.from_location_and_snapshot(match, weather_response.to_snapshot())

            logger.info(
                "Weather lookup completed",
                location=weather_info.location,
                temperature=weather_info.temperature,
            )
            return WeatherOutcome.ok(weather_info)

        except WeatherServiceError as e:
            logger.error("Error in get_weather_by_location", location=location, error=str(e))
            return WeatherOutcome.api_error(API_ERROR_MESSAGE, str(e), FailureKind.TRANSPORT_ERROR)

        except Exception as e:
            logger.error("Unexpected error in get_weather_by_location", location=location, error=str(e))
            return WeatherOutcome.api_error(API_ERROR_MESSAGE, str(e), FailureKind.UNKNOWN_FAILURE)

    async def get_multi_day_forecast(
        self, latitude: float, longitude: float, days: Optional[int] = None
    ) -> ForecastOutcome:
        """
        Get a multi-day forecast.

        Unless ``use_live_forecast`` is enabled this returns the fixed
        placeholder series, whatever the coordinates and day count.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            days: Number of days, defaults to the configured forecast length

        Returns:
            ForecastOutcome with the daily series
        """
        days = days or self.forecast_days

        if not self.use_live_forecast:
            return ForecastOutcome(
                success=True,
                forecast=ForecastResponse(daily=PLACEHOLDER_FORECAST),
                stub=True,
            )

        try:
            forecast = await self.weather_service.fetch_daily_forecast(latitude, longitude, days)
            return ForecastOutcome(success=True, forecast=forecast)
        except WeatherServiceError as e:
            logger.error("Error getting forecast", latitude=latitude, longitude=longitude, error=str(e))
            return ForecastOutcome(success=False, message=f"Failed to get forecast: {str(e)}")

    @staticmethod
    def get_recent_searches() -> List[str]:
        return list(RECENT_SEARCHES)

    async def _answer_forecast(self, query: str) -> str:
        location = extract_location_from_query(query)
        if not location:
            return NO_FORECAST_LOCATION_MESSAGE

        geocoding_response = await self.geocoding_service.lookup(location)
        match = geocoding_response.first_match()
        if match is None:
            return f'I couldn\'t find the location "{location}". Please try a different place.'

        forecast = await self.get_multi_day_forecast(match.latitude, match.longitude)
        if not forecast.success or forecast.forecast is None:
            return f"Sorry, I couldn't get the forecast for {location}."

        daily = forecast.forecast.daily
        return format_forecast(location, daily, min(self.forecast_days, len(daily.time)))

    async def _answer_current(self, query: str) -> str:
        location = extract_location_from_query(query)
        if not location:
            return NO_LOCATION_MESSAGE

        outcome = await self.get_weather_by_location(location)
        if outcome.success and outcome.weather_info:
            return generate_weather_summary(outcome.weather_info)
        return outcome.message or NO_WEATHER_MESSAGE

    async def process_query(self, query: str) -> ChatMessage:
        """
        Answer a free-text weather question.

        Queries mentioning a forecast get the multi-day forecast, everything
        else gets a summary of current conditions.

        Args:
            query: The natural language query from the user.

        Returns:
            Assistant ChatMessage; failures become an apology, never an exception
        """
        start_time = datetime.now()
        forecast = is_forecast_query(query)
        logger.info("Processing weather query", query=query, forecast=forecast)

        try:
            if forecast:
                response = await self._answer_forecast(query)
            else:
                response = await self._answer_current(query)
        except Exception as e:
            logger.error("Error processing weather query", query=query, error=str(e))
            response = QUERY_FAILED_MESSAGE

        logger.info(
            "Weather query processed",
            query=query,
            processing_time=(datetime.now() - start_time).total_seconds(),
            response_length=len(response),
        )
        return create_chat_message(ChatRole.ASSISTANT, response)

    async def describe_location(self, location: str) -> ChatMessage:
        """
        Answer a bare location name with the detailed weather card.

        Args:
            location: Place name as typed by the user

        Returns:
            Assistant ChatMessage with the weather card or the failure message
        """
        outcome = await self.get_weather_by_location(location)
        if outcome.success and outcome.weather_info:
            content = format_weather_details(outcome.weather_info)
        else:
            content = outcome.message or "Sorry, I could not find weather data for that location."
        return create_chat_message(ChatRole.ASSISTANT, content)


weather_assistant = WeatherAssistant()
