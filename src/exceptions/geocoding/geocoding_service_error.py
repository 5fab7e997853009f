from src.exceptions.base import WeatherChatError


class GeocodingServiceError(WeatherChatError):
    """Exception for geocoding failures that are turned into sentinel responses."""

    pass
