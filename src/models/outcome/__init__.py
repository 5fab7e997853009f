from src.models.outcome.outcome import (
    ErrorCode,
    FailureKind,
    ForecastOutcome,
    OutcomeError,
    WeatherOutcome,
)

__all__ = ["ErrorCode", "FailureKind", "ForecastOutcome", "OutcomeError", "WeatherOutcome"]
