import importlib
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from main import create_app
from src.services.chat_service import SUBMIT_FAILED_MESSAGE
from src.services.transcript_service import GREETING


@pytest.fixture
def client(chat_service, assistant):
    """Test client with an in-memory transcript and the mock-backed assistant."""
    app = create_app()
    app.state.chat_service = chat_service

    with patch('src.api.v1.weather.weather_routes.weather_assistant', assistant):
        with TestClient(app) as test_client:
            yield test_client


class TestHealthRoute:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["transcript_busy"] is False


class TestChatRoutes:
    """Test cases for the chat endpoints."""

    def test_get_messages_starts_with_greeting(self, client):
        response = client.get("/api/v1/chat/messages")

        assert response.status_code == 200
        messages = response.json()
        assert len(messages) == 1
        assert messages[0]["role"] == "assistant"
        assert messages[0]["content"] == GREETING

    def test_send_query(self, client):
        response = client.post("/api/v1/chat/messages", json={"query": "What's the weather in Paris?"})

        assert response.status_code == 200
        reply = response.json()
        assert reply["role"] == "assistant"
        assert reply["content"].startswith("The current weather in Paris, Île-de-France, France")

        messages = client.get("/api/v1/chat/messages").json()
        assert [m["role"] for m in messages] == ["assistant", "user", "assistant"]
        assert messages[2]["id"] == reply["id"]

    def test_send_location(self, client):
        response = client.post("/api/v1/chat/messages", json={"query": "Paris", "mode": "location"})

        assert response.status_code == 200
        assert response.json()["content"].startswith("Weather in Paris, Île-de-France, France:")

    def test_blank_query(self, client):
        response = client.post("/api/v1/chat/messages", json={"query": "   "})

        assert response.status_code == 400
        assert len(client.get("/api/v1/chat/messages").json()) == 1

    def test_busy_transcript(self, client, chat_service):
        chat_service._in_flight = True

        response = client.post("/api/v1/chat/messages", json={"query": "Paris"})

        assert response.status_code == 409
        assert response.json()["status_code"] == 409

    def test_clear(self, client):
        client.post("/api/v1/chat/messages", json={"query": "Paris"})

        response = client.delete("/api/v1/chat/messages")

        assert response.status_code == 200
        messages = response.json()
        assert len(messages) == 1
        assert messages[0]["content"] == GREETING


class TestWeatherRoutes:
    """Test cases for the weather endpoints."""

    def test_current_weather(self, client):
        response = client.get("/api/v1/weather/current/Paris")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["weather_info"]["location"] == "Paris, Île-de-France, France"

    def test_current_weather_validation_failure(self, client, mock_geocoding_service):
        response = client.get("/api/v1/weather/current/x")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["kind"] == "VALIDATION_ERROR"
        mock_geocoding_service.lookup.assert_not_called()

    def test_forecast_placeholder(self, client):
        response = client.get("/api/v1/weather/forecast", params={"latitude": 10, "longitude": 20})

        assert response.status_code == 200
        body = response.json()
        assert body["stub"] is True
        assert body["forecast"]["daily"]["time"][0] == "2025-03-07"
        assert len(body["forecast"]["daily"]["weather_code"]) == 5

    def test_forecast_rejects_bad_coordinates(self, client):
        response = client.get("/api/v1/weather/forecast", params={"latitude": 100, "longitude": 20})

        assert response.status_code == 422

    def test_weather_code(self, client):
        assert client.get("/api/v1/weather/codes/95").json() == {"code": 95, "description": "Thunderstorm"}
        assert client.get("/api/v1/weather/codes/9999").json()["description"] == "Unknown"

    def test_recent_searches(self, client):
        response = client.get("/api/v1/weather/recent-searches")

        assert response.json() == ["London", "New York", "Tokyo", "Paris", "Sydney"]


class TestAssistantFailure:
    def test_failed_answer_is_reported_in_chat(self, client, assistant):
        assistant.process_query = AsyncMock(side_effect=RuntimeError("boom"))

        response = client.post("/api/v1/chat/messages", json={"query": "Paris"})

        assert response.status_code == 200
        assert response.json()["content"] == SUBMIT_FAILED_MESSAGE
        messages = client.get("/api/v1/chat/messages").json()
        assert [m["role"] for m in messages] == ["assistant", "user", "assistant"]


class TestLoggingSetup:
    def test_logging_configured_on_import(self):
        import main

        with patch('src.utils.logging_config.setup_logging') as mock_setup:
            importlib.reload(main)

        mock_setup.assert_called_once_with()
