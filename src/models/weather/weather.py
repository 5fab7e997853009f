from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.geocoding.geocoding import LocationMatch
from src.utils.weather_codes import get_weather_description

CURRENT_WEATHER_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
)


class OpenMeteoCurrent(BaseModel):
    """Current condition measurements."""

    time: str = Field(..., description="Observation time (ISO 8601, local)")
    temperature_2m: float = Field(..., description="Air temperature at 2 meters")
    relative_humidity_2m: float = Field(..., ge=0, le=100, description="Relative humidity percentage")
    apparent_temperature: float = Field(..., description="Feels-like temperature")
    precipitation: float = Field(..., ge=0, description="Precipitation in mm")
    weather_code: int = Field(..., description="WMO weather code")
    wind_speed_10m: float = Field(..., ge=0, description="Wind speed at 10 meters")


class OpenMeteoCurrentUnits(BaseModel):
    """Units of the current condition measurements."""

    temperature_2m: str = Field(..., description="Temperature unit (e.g., °C)")
    relative_humidity_2m: Optional[str] = Field(None, description="Humidity unit")
    apparent_temperature: Optional[str] = Field(None, description="Feels-like temperature unit")
    precipitation: Optional[str] = Field(None, description="Precipitation unit")
    weather_code: Optional[str] = Field(None, description="Weather code unit")
    wind_speed_10m: str = Field(..., description="Wind speed unit (e.g., km/h)")


class OpenMeteoCurrentResponse(BaseModel):
    """Open-Meteo forecast API response restricted to the current block."""

    latitude: Optional[float] = Field(None, description="Grid cell latitude")
    longitude: Optional[float] = Field(None, description="Grid cell longitude")
    current: OpenMeteoCurrent = Field(..., description="Current conditions")
    current_units: OpenMeteoCurrentUnits = Field(..., description="Units of the current conditions")

    def to_snapshot(self) -> "WeatherSnapshot":
        """Build a WeatherSnapshot, resolving the weather code to its description."""
        current = self.current
        return WeatherSnapshot(
            temperature=current.temperature_2m,
            temperature_unit=self.current_units.temperature_2m,
            humidity=current.relative_humidity_2m,
            feels_like=current.apparent_temperature,
            precipitation=current.precipitation,
            wind_speed=current.wind_speed_10m,
            wind_speed_unit=self.current_units.wind_speed_10m,
            time=current.time,
            weather_code=current.weather_code,
            description=get_weather_description(current.weather_code),
        )


class WeatherSnapshot(BaseModel):
    """Point-in-time set of current condition measurements."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    temperature_unit: str
    humidity: float
    feels_like: float
    precipitation: float
    wind_speed: float
    wind_speed_unit: str
    time: str
    weather_code: int
    description: str


class WeatherInfo(BaseModel):
    """Weather for a resolved location, as handed to the formatters."""

    model_config = ConfigDict(frozen=True)

    location: str = Field(..., description="Display name: name, region and country")
    temperature: float = Field(..., description="Current temperature")
    unit: str = Field(..., description="Temperature unit")
    description: str = Field(..., description="Weather description")
    humidity: float = Field(..., description="Relative humidity percentage")
    feels_like: float = Field(..., description="Feels-like temperature")
    precipitation: float = Field(..., description="Precipitation in mm")
    wind_speed: float = Field(..., description="Wind speed")
    wind_speed_unit: str = Field(..., description="Wind speed unit")
    time: str = Field(..., description="Observation time")
    weather_code: int = Field(..., description="WMO weather code")
    country: str = Field(..., description="Country name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")

    @classmethod
    def from_location_and_snapshot(
        cls, location: LocationMatch, snapshot: WeatherSnapshot
    ) -> "WeatherInfo":
        """
        Combine a geocoding match with a weather snapshot.

        Args:
            location: First geocoding match for the requested place
            snapshot: Current conditions at the match's coordinates

        Returns:
            WeatherInfo: Record ready for formatting
        """
        return cls(
            location=location.display_name,
            temperature=snapshot.temperature,
            unit=snapshot.temperature_unit,
            description=snapshot.description,
            humidity=snapshot.humidity,
            feels_like=snapshot.feels_like,
            precipitation=snapshot.precipitation,
            wind_speed=snapshot.wind_speed,
            wind_speed_unit=snapshot.wind_speed_unit,
            time=snapshot.time,
            weather_code=snapshot.weather_code,
            country=location.country,
            latitude=location.latitude,
            longitude=location.longitude,
        )
