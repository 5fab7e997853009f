from src.models.geocoding.geocoding import GeocodingResponse, GeocodingResult, LocationMatch

__all__ = ["GeocodingResponse", "GeocodingResult", "LocationMatch"]
