from typing import Any, Dict

import httpx
import structlog
from pydantic import ValidationError

from src.config.config import config
from src.exceptions.geocoding import GeocodingServiceError
from src.models.geocoding.geocoding import GeocodingResponse
from src.utils.singleton import Singleton

logger = structlog.get_logger(__name__)

GEOCODING_FAILED_REASON = "Failed to fetch location data"


class GeocodingService(Singleton):
    """
    Service resolving place names to coordinates with the Open-Meteo geocoding API.

    Lookups never raise: transport and parsing failures are logged and
    reported as a sentinel response carrying ``error=True``.
    """

    def __init__(self):
        """Initialize the geocoding service."""
        super().__init__()

        if hasattr(self, "_geocoding_initialized"):
            return

        self.base_url = config.geocoding_base_url
        self.language = config.geocoding_language
        self.timeout = httpx.Timeout(config.request_timeout_seconds)

        self._geocoding_initialized = True

    async def _make_request(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a single HTTP request to the geocoding API.

        Args:
            params: Query parameters

        Returns:
            JSON response from the API

        Raises:
            GeocodingServiceError: If the request fails or the status is not 200
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                logger.info("Making geocoding request", url=self.base_url, params=params)
                response = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise GeocodingServiceError(f"Geocoding request failed: {str(e)}") from e

        if response.status_code != 200:
            logger.warning(
                "Geocoding request failed",
                status_code=response.status_code,
                response_text=response.text,
            )
            raise GeocodingServiceError(GEOCODING_FAILED_REASON)

        try:
            return response.json()
        except ValueError as e:
            raise GeocodingServiceError(f"Invalid geocoding response: {str(e)}") from e

    async def lookup(self, name: str) -> GeocodingResponse:
        """
        Look up a place by name.

        Args:
            name: Free-text place name

        Returns:
            GeocodingResponse with at most one result; no results when nothing
            matched, or the failure sentinel when the lookup itself failed
        """
        logger.info("Looking up location", name=name)
        params = {
            "name": name,
            "count": 1,
            "language": self.language,
            "format": "json",
        }

        try:
            data = await self._make_request(params)
            response = GeocodingResponse(**data)
        except (GeocodingServiceError, ValidationError, TypeError) as e:
            logger.error("Error fetching location", name=name, error=str(e))
            return GeocodingResponse.failed(GEOCODING_FAILED_REASON)

        logger.info(
            "Location lookup completed",
            name=name,
            result_count=len(response.results or []),
        )
        return response


geocoding_service = GeocodingService()
