"""Great-circle distance helpers."""

import math

from connectwork.config import EARTH_RADIUS_KM
from connectwork.schemas.location import Coordinate


def degrees_to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def haversine_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute the great-circle distance between two points.

    Args:
        lat1: Latitude of the first point in decimal degrees.
        lon1: Longitude of the first point in decimal degrees.
        lat2: Latitude of the second point in decimal degrees.
        lon2: Longitude of the second point in decimal degrees.

    Returns:
        Distance in kilometers.
    """
    d_lat = degrees_to_radians(lat2 - lat1)
    d_lon = degrees_to_radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(degrees_to_radians(lat1))
        * math.cos(degrees_to_radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a marginally above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(origin: Coordinate, target: Coordinate) -> float:
    """Distance in kilometers between two coordinates."""
    return haversine_distance_km(origin.lat, origin.lon, target.lat, target.lon)
