"""Filter steps shared by the job and worker search pipelines."""

import logging
from collections.abc import Callable
from typing import TypeVar

from connectwork.geo.distance import distance_between
from connectwork.geo.geocoder import Geocoder
from connectwork.matching.skills import normalize_skill, normalize_skills
from connectwork.schemas.location import Coordinate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_search_origin(
    coordinates: Coordinate | None,
    location: str | None,
    geocoder: Geocoder | None,
) -> Coordinate | None:
    """Work out where a search is centred.

    Explicit coordinates win over location text. Any geocoding failure, including
    a timeout raised by the geocoder itself, is logged and yields None so the
    caller can carry on without a geo-filter.

    Args:
        coordinates: Explicit search origin, if the caller has one.
        location: Location text to geocode otherwise.
        geocoder: Geocoding collaborator (None disables geocoding).

    Returns:
        The search origin, or None if there is none or it could not be resolved.
    """
    if coordinates is not None:
        return coordinates
    if not location or not location.strip():
        return None
    if geocoder is None:
        logger.warning(f"No geocoder configured, ignoring location '{location}'")
        return None

    try:
        return geocoder.resolve_coordinate(location)
    except Exception as e:
        logger.warning(f"Geocoding '{location}' failed, continuing without distance filter: {e}")
        return None


def filter_by_distance(
    items: list[T],
    origin: Coordinate,
    max_distance_km: float,
    get_coordinate: Callable[[T], Coordinate | None],
) -> list[tuple[T, float]]:
    """Keep items within max_distance_km of origin.

    Items without a coordinate are excluded.

    Returns:
        List of (item, distance_km) tuples in input order.
    """
    results = []
    for item in items:
        coordinate = get_coordinate(item)
        if coordinate is None:
            continue

        distance = distance_between(origin, coordinate)
        if distance <= max_distance_km:
            results.append((item, distance))

    return results


def text_contains(query: str | None, *fields: str | None) -> bool:
    """Case-insensitive substring match of query against any non-empty field."""
    if not query or not query.strip():
        return True
    needle = query.strip().lower()
    return any(needle in field.lower() for field in fields if field)


def has_any_skill(skills: list[str], wanted: list[str]) -> bool:
    """True if any wanted skill equals one of skills after normalization."""
    normalized = set(normalize_skills(skills))
    return any(normalize_skill(skill) in normalized for skill in wanted)
