from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """
    Application settings loaded from environment variables and .env files.

    This class handles all configuration for the weather chat assistant including
    the Open-Meteo endpoints, transcript persistence and the HTTP server.
    """

    # Open-Meteo Configuration
    geocoding_base_url: str = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        description="Open-Meteo geocoding search endpoint",
    )
    geocoding_language: str = Field(default="en", description="Language for geocoding results")
    weather_base_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        description="Open-Meteo forecast endpoint",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="HTTP request timeout")

    # Forecast Configuration
    default_forecast_days: int = Field(default=5, ge=1, le=16, description="Days in a multi-day forecast")
    use_live_forecast: bool = Field(
        default=False,
        description="Call the live daily forecast API instead of the fixed placeholder series",
    )

    # Transcript Configuration
    transcript_store_path: str = Field(
        default="data/transcript.json", description="Path of the JSON file holding the chat transcript"
    )
    transcript_storage_key: str = Field(
        default="weather-chat-messages", description="Key the transcript is stored under"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="FastAPI host")
    api_port: int = Field(default=8000, ge=1, le=65535, description="FastAPI port")

    # Logging Configuration
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json/text)")

    @field_validator("log_level")
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    def validate_log_format(cls, v):
        if v.lower() not in ("json", "text"):
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'text'")
        return v.lower()

    def get_transcript_path(self) -> Path:
        """Get the absolute path to the transcript file."""
        return Path(self.transcript_store_path).resolve()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


config = Config()
