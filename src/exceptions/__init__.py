from src.exceptions.base import WeatherChatError
from src.exceptions.geocoding import GeocodingServiceError
from src.exceptions.transcript import (
    TranscriptBusyError,
    TranscriptError,
    TranscriptStoreError,
)
from src.exceptions.weather import APIRequestError, WeatherServiceError

__all__ = [
    "WeatherChatError",
    "GeocodingServiceError",
    "TranscriptError",
    "TranscriptBusyError",
    "TranscriptStoreError",
    "WeatherServiceError",
    "APIRequestError",
]
