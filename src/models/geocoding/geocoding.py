from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GeocodingResult(BaseModel):
    """Single place returned by the Open-Meteo geocoding API."""

    id: Optional[int] = Field(None, description="Open-Meteo location ID")
    name: str = Field(..., description="Place name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")
    country: str = Field(..., description="Country name")
    country_code: Optional[str] = Field(None, description="ISO country code (e.g., FR, GB)")
    admin1: Optional[str] = Field(None, description="First-level administrative region")


class LocationMatch(BaseModel):
    """Location resolved from a free-text place name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Place name")
    country: str = Field(..., description="Country name")
    country_code: Optional[str] = Field(None, description="ISO country code")
    admin1: Optional[str] = Field(None, description="First-level administrative region")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")

    @property
    def display_name(self) -> str:
        """Name, region and country joined with commas, skipping a missing region."""
        parts = [self.name, self.admin1, self.country]
        return ", ".join(part for part in parts if part)

    @classmethod
    def from_geocoding_result(cls, result: GeocodingResult) -> "LocationMatch":
        return cls(
            name=result.name,
            country=result.country,
            country_code=result.country_code,
            admin1=result.admin1,
            latitude=result.latitude,
            longitude=result.longitude,
        )


class GeocodingResponse(BaseModel):
    """Open-Meteo geocoding API response, or the sentinel returned when the call failed."""

    results: Optional[List[GeocodingResult]] = Field(None, description="Matching places")
    error: Optional[bool] = Field(None, description="Set when the lookup failed")
    reason: Optional[str] = Field(None, description="Failure reason")

    @classmethod
    def failed(cls, reason: str) -> "GeocodingResponse":
        return cls(error=True, reason=reason)

    def first_match(self) -> Optional[LocationMatch]:
        """
        Get the first matching location, if any.

        Returns:
            LocationMatch built from the first result, or None when nothing matched
        """
        if not self.results:
            return None
        return LocationMatch.from_geocoding_result(self.results[0])
