"""Forward and reverse geocoding through OpenStreetMap Nominatim."""

import logging
from typing import Protocol

import requests

from connectwork.config import (
    CURRENT_LOCATION_LABEL,
    GEOCODER_LANGUAGE,
    GEOCODER_USER_AGENT,
    GEOCODING_TIMEOUT,
    NOMINATIM_URL,
)
from connectwork.schemas.location import Coordinate

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Base class for geocoding failures."""

    pass


class LocationNotFound(GeocodingError):
    """Raised when the geocoding service answered but found no match."""

    pass


class GeocodingUnavailable(GeocodingError):
    """Raised when the geocoding service could not be reached or answered badly."""

    pass


class Geocoder(Protocol):
    """Resolves location text to coordinates and back.

    Implementations raise LocationNotFound when the place is unknown and
    GeocodingUnavailable when the service fails or times out. Search pipelines
    also tolerate any other exception, treating it as unavailable.
    """

    def resolve_coordinate(self, location_text: str) -> Coordinate: ...

    def describe_coordinate(self, coordinate: Coordinate) -> str: ...


class NominatimGeocoder:
    """Geocoder backed by a Nominatim HTTP endpoint."""

    def __init__(
        self,
        base_url: str = NOMINATIM_URL,
        user_agent: str = GEOCODER_USER_AGENT,
        timeout: float = GEOCODING_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "User-Agent": user_agent,
            "Accept-Language": GEOCODER_LANGUAGE,
        }

    def _get(self, path: str, params: dict):
        url = f"{self.base_url}/{path}"
        try:
            response = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Error calling geocoding service: {e}")
            raise GeocodingUnavailable(str(e)) from e
        except ValueError as e:
            logger.error(f"Geocoding service returned invalid JSON: {e}")
            raise GeocodingUnavailable("Invalid response from geocoding service") from e

    def resolve_coordinate(self, location_text: str) -> Coordinate:
        """Convert a location string to coordinates.

        Args:
            location_text: Free-text location (e.g., "Nairobi, Kenya").

        Returns:
            Coordinate of the best match.

        Raises:
            LocationNotFound: If the service returned no results.
            GeocodingUnavailable: If the request failed or the payload was malformed.
        """
        if not location_text or not location_text.strip():
            raise LocationNotFound("Empty location")

        data = self._get("search", {"format": "json", "q": location_text.strip(), "limit": 1})
        if not data:
            raise LocationNotFound(f"Location not found: {location_text}")

        try:
            return Coordinate(lat=float(data[0]["lat"]), lon=float(data[0]["lon"]))
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise GeocodingUnavailable(f"Unexpected geocoding payload: {e}") from e

    def describe_coordinate(self, coordinate: Coordinate) -> str:
        """Convert coordinates to a human-readable address (reverse geocoding).

        Raises:
            LocationNotFound: If the service has no address for the point.
            GeocodingUnavailable: If the request failed.
        """
        data = self._get(
            "reverse",
            {
                "format": "json",
                "lat": coordinate.lat,
                "lon": coordinate.lon,
                "zoom": 18,
                "addressdetails": 1,
            },
        )
        if not isinstance(data, dict) or not data.get("display_name"):
            raise LocationNotFound(f"No address for {coordinate.lat}, {coordinate.lon}")
        return data["display_name"]


def describe_coordinate_or_default(
    geocoder: Geocoder,
    coordinate: Coordinate,
    default: str = CURRENT_LOCATION_LABEL,
) -> str:
    """Reverse geocode for display, falling back to a generic label on failure."""
    try:
        return geocoder.describe_coordinate(coordinate)
    except Exception as e:
        logger.warning(f"Could not describe {coordinate.lat}, {coordinate.lon}: {e}")
        return default
