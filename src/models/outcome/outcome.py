from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from src.models.weather.forecast import ForecastResponse
from src.models.weather.weather import WeatherInfo


class FailureKind(str, Enum):
    """Why a weather lookup did not produce a result."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    UNKNOWN_FAILURE = "UNKNOWN_FAILURE"


class ErrorCode(str, Enum):
    """Machine-readable codes exposed to API clients."""

    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    API_ERROR = "API_ERROR"


class OutcomeError(BaseModel):
    code: ErrorCode = Field(..., description="Machine-readable error code")
    details: str = Field(..., description="Diagnostic details, never shown in chat")


class WeatherOutcome(BaseModel):
    """Result of a current-weather lookup by location name."""

    success: bool
    message: Optional[str] = Field(None, description="User-facing message for failures")
    weather_info: Optional[WeatherInfo] = None
    kind: Optional[FailureKind] = Field(None, description="Failure category")
    error: Optional[OutcomeError] = None

    @classmethod
    def ok(cls, weather_info: WeatherInfo) -> "WeatherOutcome":
        return cls(success=True, weather_info=weather_info)

    @classmethod
    def invalid(cls, message: str) -> "WeatherOutcome":
        return cls(success=False, message=message, kind=FailureKind.VALIDATION_ERROR)

    @classmethod
    def not_found(cls, message: str, details: str) -> "WeatherOutcome":
        return cls(
            success=False,
            message=message,
            kind=FailureKind.LOCATION_NOT_FOUND,
            error=OutcomeError(code=ErrorCode.LOCATION_NOT_FOUND, details=details),
        )

    @classmethod
    def api_error(cls, message: str, details: str, kind: FailureKind) -> "WeatherOutcome":
        return cls(
            success=False,
            message=message,
            kind=kind,
            error=OutcomeError(code=ErrorCode.API_ERROR, details=details),
        )


class ForecastOutcome(BaseModel):
    """Result of a multi-day forecast request."""

    success: bool
    message: Optional[str] = None
    forecast: Optional[ForecastResponse] = None
    stub: bool = Field(False, description="True when the forecast is the fixed placeholder series")
