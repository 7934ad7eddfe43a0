"""
Reverse geocoding client.

Turns a geocenter into a human-readable locality name via the
Google Geocoding API.
"""

import asyncio
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError

from geolog.shared.constants import (
    GEOCODE_DELAY_SECONDS,
    GEOCODE_TIMEOUT_SECONDS,
    GOOGLE_GEOCODE_URL,
    LOCALITY_RESULT_TYPES,
)
from geolog.shared.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class GeocodeResult(BaseModel):
    """One entry of a geocoding response."""
    formatted_address: str = ""
    types: List[str] = Field(default_factory=list)


class GeocodeResponse(BaseModel):
    """Geocoding response body; missing status is treated as OK."""
    status: str = "OK"
    results: List[GeocodeResult] = Field(default_factory=list)


class ReverseGeocoder:
    """
    Async Google reverse geocoder.

    Every call sleeps `delay` seconds first so that a loop over many
    travelers stays under the free-tier rate. Failures raise
    ExternalServiceError; callers decide whether to continue.
    """

    def __init__(
        self,
        api_key: str,
        url: str = GOOGLE_GEOCODE_URL,
        timeout: float = GEOCODE_TIMEOUT_SECONDS,
        delay: float = GEOCODE_DELAY_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.delay = delay
        self._transport = transport

    async def reverse_geocode(self, lat: float, lon: float) -> str:
        """
        Look up the locality containing a point.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            Formatted address of the first locality or region result,
            or "" if the API has none

        Raises:
            ExternalServiceError: On network, HTTP or payload errors
        """
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        params = {
            "latlng": f"{lat:.6f},{lon:.6f}",
            "key": self.api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.url, params=params)
        except httpx.TimeoutException as e:
            raise ExternalServiceError(f"geocoding api timed out: {e}") from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                f"failed to retrieve location from google geocoding api: {e}"
            ) from e

        if response.status_code != 200:
            raise ExternalServiceError(
                f"Google APIs call failed with code {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ExternalServiceError(
                f"invalid JSON response body from Google geocoding api: {e}"
            ) from e

        try:
            geocode = GeocodeResponse.model_validate(payload)
        except ValidationError as e:
            raise ExternalServiceError(
                f"malformed response from Google geocoding api: {e}"
            ) from e

        if geocode.status not in ("OK", "ZERO_RESULTS"):
            raise ExternalServiceError(f"geocoding api returned status {geocode.status}")

        for result in geocode.results:
            if any(t in LOCALITY_RESULT_TYPES for t in result.types):
                return result.formatted_address

        logger.debug(f"No locality found near {lat:.4f},{lon:.4f}")
        return ""
