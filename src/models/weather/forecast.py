from datetime import date
from typing import List

from pydantic import BaseModel, Field, model_validator

from src.utils.weather_codes import get_weather_description

DAILY_FORECAST_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
)


class ForecastDay(BaseModel):
    """One day of a multi-day forecast."""

    date: date
    temperature_max: float
    temperature_min: float
    precipitation_sum: float
    weather_code: int

    @property
    def description(self) -> str:
        return get_weather_description(self.weather_code)


class DailyForecast(BaseModel):
    """Daily block of the Open-Meteo forecast API, as parallel per-day lists."""

    time: List[date] = Field(..., description="Forecast dates")
    temperature_2m_max: List[float] = Field(..., description="Daily maximum temperatures")
    temperature_2m_min: List[float] = Field(..., description="Daily minimum temperatures")
    precipitation_sum: List[float] = Field(..., description="Daily precipitation totals in mm")
    weather_code: List[int] = Field(..., description="Daily WMO weather codes")

    @model_validator(mode="after")
    def check_lengths(self):
        lengths = {
            len(self.time),
            len(self.temperature_2m_max),
            len(self.temperature_2m_min),
            len(self.precipitation_sum),
            len(self.weather_code),
        }
        if len(lengths) != 1:
            raise ValueError("Daily forecast series must all have the same length")
        return self

    def days(self) -> List[ForecastDay]:
        return [
            ForecastDay(
                date=self.time[i],
                temperature_max=self.temperature_2m_max[i],
                temperature_min=self.temperature_2m_min[i],
                precipitation_sum=self.precipitation_sum[i],
                weather_code=self.weather_code[i],
            )
            for i in range(len(self.time))
        ]


class ForecastResponse(BaseModel):
    """Open-Meteo forecast API response restricted to the daily block."""

    daily: DailyForecast
