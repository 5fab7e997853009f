class WeatherChatError(Exception):
    """Base exception for all weather chat errors."""

    pass
