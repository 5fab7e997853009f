from typing import Dict

UNKNOWN_WEATHER = "Unknown"

WEATHER_CODE_DESCRIPTIONS: Dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    51: "Light drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    71: "Slight snow fall",
    80: "Slight rain showers",
    95: "Thunderstorm",
}


def get_weather_description(code: int) -> str:
    """Map an Open-Meteo weather code to its description, or "Unknown"."""
    return WEATHER_CODE_DESCRIPTIONS.get(code, UNKNOWN_WEATHER)
