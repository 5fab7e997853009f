from src.exceptions.geocoding.geocoding_service_error import GeocodingServiceError

__all__ = ["GeocodingServiceError"]
