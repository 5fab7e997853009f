"""Render weather records and forecasts as chat text."""

from datetime import date
from typing import Union

from src.models.weather.forecast import DailyForecast
from src.models.weather.weather import WeatherInfo

FEELS_LIKE_THRESHOLD = 2
WINDY_THRESHOLD = 15
HIGH_HUMIDITY_THRESHOLD = 80
DRY_AIR_THRESHOLD = 30

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_number(value: Union[int, float]) -> str:
    """Format a measurement the way it is shown in chat: 20.0 -> "20", 12.4 -> "12.4"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def generate_weather_summary(info: WeatherInfo) -> str:
    """
    Build a natural-language summary of current conditions.

    Clauses are appended in a fixed order: feels-like, precipitation, wind
    and humidity, each only when its threshold is crossed.

    Args:
        info: Weather for a resolved location

    Returns:
        Summary sentences joined by single spaces
    """
    temperature = format_number(info.temperature)
    summary = (
        f"The current weather in {info.location} is {info.description.lower()} "
        f"with a temperature of {temperature}{info.unit}."
    )

    if abs(info.temperature - info.feels_like) > FEELS_LIKE_THRESHOLD:
        cause = "wind chill" if info.feels_like < info.temperature else "humidity"
        summary += f" It feels like {format_number(info.feels_like)}{info.unit} due to {cause}."

    if info.precipitation > 0:
        summary += f" There has been {format_number(info.precipitation)} mm of precipitation."

    if info.wind_speed > WINDY_THRESHOLD:
        summary += (
            f" It's quite windy with wind speeds of "
            f"{format_number(info.wind_speed)} {info.wind_speed_unit}."
        )

    humidity = format_number(info.humidity)
    if info.humidity > HIGH_HUMIDITY_THRESHOLD:
        summary += f" The humidity is high at {humidity}%."
    elif info.humidity < DRY_AIR_THRESHOLD:
        summary += f" The air is quite dry with only {humidity}% humidity."

    return summary


def format_weather_details(info: WeatherInfo) -> str:
    """Multi-line weather card used when the user typed a bare location."""
    lines = [
        f"Weather in {info.location}:",
        f"Temperature: {format_number(info.temperature)}{info.unit}",
        f"Feels like: {format_number(info.feels_like)}{info.unit}",
        f"Condition: {info.description}",
        f"Humidity: {format_number(info.humidity)}%",
        f"Precipitation: {format_number(info.precipitation)} mm",
        f"Wind speed: {format_number(info.wind_speed)} {info.wind_speed_unit}",
    ]
    return "\n\n".join(lines)


def format_forecast_date(day: date) -> str:
    """Short weekday, month and day, e.g. "Fri, Mar 7". Independent of the process locale."""
    return f"{WEEKDAY_NAMES[day.weekday()]}, {MONTH_NAMES[day.month - 1]} {day.day}"


def format_forecast(location: str, forecast: DailyForecast, days: int) -> str:
    """
    Render a multi-day forecast as one line per day under a header.

    Args:
        location: Location text as the user gave it
        forecast: Daily forecast series
        days: Number of days to render

    Returns:
        Forecast message text
    """
    response = f"Here's the {days}-day forecast for {location}:\n\n"
    for day in forecast.days()[:days]:
        response += (
            f"{format_forecast_date(day.date)}: {day.description}, "
            f"{format_number(day.temperature_min)}°C to {format_number(day.temperature_max)}°C\n"
        )
    return response
