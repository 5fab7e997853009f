import pytest
from unittest.mock import AsyncMock, MagicMock

from assistant.weather_assistant import WeatherAssistant
from src.models.geocoding.geocoding import GeocodingResponse
from src.models.weather.weather import OpenMeteoCurrentResponse, WeatherInfo
from src.services.chat_service import ChatService
from src.services.transcript_service import ChatTranscript
from src.services.transcript_store import InMemoryTranscriptStore


@pytest.fixture
def geocoding_payload():
    """Geocoding API body for Paris with an admin region."""
    return {
        "results": [
            {
                "id": 2988507,
                "name": "Paris",
                "latitude": 48.85341,
                "longitude": 2.3488,
                "country": "France",
                "country_code": "FR",
                "admin1": "Île-de-France",
            }
        ],
        "generationtime_ms": 0.7,
    }


@pytest.fixture
def weather_payload():
    """Forecast API body with current conditions."""
    return {
        "latitude": 48.86,
        "longitude": 2.35,
        "current_units": {
            "time": "iso8601",
            "interval": "seconds",
            "temperature_2m": "°C",
            "relative_humidity_2m": "%",
            "apparent_temperature": "°C",
            "precipitation": "mm",
            "weather_code": "wmo code",
            "wind_speed_10m": "km/h",
        },
        "current": {
            "time": "2025-03-07T12:00",
            "interval": 900,
            "temperature_2m": 14.2,
            "relative_humidity_2m": 62,
            "apparent_temperature": 12.9,
            "precipitation": 0.0,
            "weather_code": 2,
            "wind_speed_10m": 9.4,
        },
    }


@pytest.fixture
def geocoding_response(geocoding_payload):
    return GeocodingResponse(**geocoding_payload)


@pytest.fixture
def weather_response(weather_payload):
    return OpenMeteoCurrentResponse(**weather_payload)


@pytest.fixture
def make_weather_info():
    """Factory for WeatherInfo records with calm, unremarkable defaults."""

    def _make(**overrides):
        fields = {
            "location": "Paris, France",
            "temperature": 20.0,
            "unit": "°C",
            "description": "Partly cloudy",
            "humidity": 50,
            "feels_like": 19.0,
            "precipitation": 0.0,
            "wind_speed": 5.0,
            "wind_speed_unit": "km/h",
            "time": "2025-03-07T12:00",
            "weather_code": 2,
            "country": "France",
            "latitude": 48.85341,
            "longitude": 2.3488,
        }
        fields.update(overrides)
        return WeatherInfo(**fields)

    return _make


@pytest.fixture
def mock_geocoding_service(geocoding_response):
    """Mock geocoding service returning Paris."""
    mock_service = MagicMock()
    mock_service.lookup = AsyncMock(return_value=geocoding_response)
    return mock_service


@pytest.fixture
def mock_weather_service(weather_response):
    """Mock weather service returning partly cloudy conditions."""
    mock_service = MagicMock()
    mock_service.fetch_current = AsyncMock(return_value=weather_response)
    mock_service.fetch_daily_forecast = AsyncMock()
    return mock_service


@pytest.fixture
def assistant(mock_geocoding_service, mock_weather_service):
    """Weather assistant wired to the mock services, using the placeholder forecast."""
    WeatherAssistant.reset_instance()
    weather_assistant = WeatherAssistant(
        geocoding=mock_geocoding_service,
        weather=mock_weather_service,
    )
    weather_assistant.use_live_forecast = False
    weather_assistant.forecast_days = 5
    yield weather_assistant
    WeatherAssistant.reset_instance()


@pytest.fixture
def transcript_store():
    return InMemoryTranscriptStore()


@pytest.fixture
def chat_service(transcript_store, assistant):
    return ChatService(ChatTranscript(transcript_store), assistant=assistant)
