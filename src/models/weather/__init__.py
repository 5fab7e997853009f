from src.models.weather.forecast import DailyForecast, ForecastDay, ForecastResponse
from src.models.weather.weather import (
    OpenMeteoCurrent,
    OpenMeteoCurrentResponse,
    OpenMeteoCurrentUnits,
    WeatherInfo,
    WeatherSnapshot,
)

__all__ = [
    "DailyForecast",
    "ForecastDay",
    "ForecastResponse",
    "OpenMeteoCurrent",
    "OpenMeteoCurrentResponse",
    "OpenMeteoCurrentUnits",
    "WeatherInfo",
    "WeatherSnapshot",
]
