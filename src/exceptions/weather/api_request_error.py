from src.exceptions.weather.weather_service_error import WeatherServiceError


class APIRequestError(WeatherServiceError):
    """Exception for transport-level failures talking to the weather API."""

    pass
