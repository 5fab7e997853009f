from src.exceptions.base import WeatherChatError


class TranscriptError(WeatherChatError):
    """Base exception for chat transcript errors."""

    pass
