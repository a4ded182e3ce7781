"""Worker search pipeline: filter, geo-filter and rank worker profiles."""

import logging

from connectwork.config import DEFAULT_WORKER_MAX_DISTANCE_KM
from connectwork.geo.geocoder import Geocoder
from connectwork.matching.filter import (
    filter_by_distance,
    has_any_skill,
    resolve_search_origin,
    text_contains,
)
from connectwork.matching.skills import (
    DEFAULT_MATCHER,
    SkillMatcher,
    normalize_skills,
    relevance_score,
)
from connectwork.schemas.criteria import SortOrder, WorkerSearchCriteria, WorkerSortBy
from connectwork.schemas.match import ScoredWorker
from connectwork.schemas.worker import Worker

logger = logging.getLogger(__name__)


def filter_by_rating(workers: list[Worker], min_rating: float | None) -> list[Worker]:
    """Keep workers rated at least min_rating. Unrated workers fail a positive floor."""
    if min_rating is None or min_rating <= 0:
        return workers
    return [w for w in workers if w.rating is not None and w.rating >= min_rating]


def filter_by_rate(
    workers: list[Worker],
    min_rate: float | None,
    max_rate: float | None,
) -> list[Worker]:
    """Keep workers whose hourly rate lies within the bounds.

    Workers without a rate are dropped as soon as either bound is active.
    """
    if min_rate is None and max_rate is None:
        return workers

    results = []
    for worker in workers:
        rate = worker.hourly_rate
        if rate is None:
            continue
        if min_rate is not None and rate < min_rate:
            continue
        if max_rate is not None and rate > max_rate:
            continue
        results.append(worker)
    return results


def filter_by_service(workers: list[Worker], service_ids: list[str]) -> list[Worker]:
    if not service_ids:
        return workers
    allowed = set(service_ids)
    return [w for w in workers if any(s.service_id in allowed for s in w.services)]


def filter_by_query(workers: list[Worker], query: str | None) -> list[Worker]:
    """Match query against name, profession and offered service names."""
    return [
        w
        for w in workers
        if text_contains(query, w.full_name, w.profession, *(s.name for s in w.services))
    ]


def filter_by_skills(workers: list[Worker], skills: list[str]) -> list[Worker]:
    """Keep workers having any of the requested skills. Blank skills are ignored."""
    wanted = normalize_skills(skills)
    if not wanted:
        return workers
    return [w for w in workers if has_any_skill(w.skills, wanted)]


def _sort_key(sort_by: WorkerSortBy | None):
    if sort_by == WorkerSortBy.RATING:
        return lambda r: r.worker.rating if r.worker.rating is not None else -1.0
    if sort_by == WorkerSortBy.RATE:
        return lambda r: r.worker.hourly_rate if r.worker.hourly_rate is not None else -1.0
    return lambda r: r.relevance.total


def rank_results(
    results: list[ScoredWorker],
    sort_by: WorkerSortBy | None,
    sort_order: SortOrder | None,
    by_distance: bool = False,
) -> list[ScoredWorker]:
    """Sort scored workers in place and return them.

    Distance ordering (nearest first) overrides sort_by once a geo-filter ran.
    Ties are broken by name, then id.
    """
    results.sort(key=lambda r: (r.worker.full_name.lower(), r.worker.id))

    if by_distance:
        results.sort(key=lambda r: r.distance_km)
    else:
        results.sort(key=_sort_key(sort_by), reverse=sort_order != SortOrder.ASC)

    return results


def search_workers(
    workers: list[Worker],
    criteria: WorkerSearchCriteria | None = None,
    geocoder: Geocoder | None = None,
    matcher: SkillMatcher = DEFAULT_MATCHER,
) -> list[ScoredWorker]:
    """Filter and rank worker profiles.

    Pipeline: rating -> rate -> service -> query -> skills -> distance -> rank.
    Geocoding failures disable the distance step instead of failing the search.

    Args:
        workers: Candidate workers fetched from the store.
        criteria: Search criteria (None matches every worker).
        geocoder: Geocoder used when criteria.location must be resolved.
        matcher: Skill matching strategy for relevance scoring.

    Returns:
        List of ScoredWorker objects.

    Raises:
        InvalidCriteria: If criteria bounds are out of range or contradictory.
    """
    criteria = criteria or WorkerSearchCriteria()
    criteria.check()

    candidates = filter_by_rating(workers, criteria.min_rating)
    candidates = filter_by_rate(candidates, criteria.min_rate, criteria.max_rate)
    candidates = filter_by_service(candidates, criteria.service_ids)
    candidates = filter_by_query(candidates, criteria.query)
    candidates = filter_by_skills(candidates, criteria.skills)
    logger.info(f"{len(candidates)} of {len(workers)} workers passed attribute filters")

    located: list[tuple[Worker, float | None]] = [(worker, None) for worker in candidates]
    origin = resolve_search_origin(criteria.coordinates, criteria.location, geocoder)
    if origin is not None:
        max_distance = criteria.max_distance_km
        if max_distance is None:
            max_distance = DEFAULT_WORKER_MAX_DISTANCE_KM
        located = filter_by_distance(candidates, origin, max_distance, lambda w: w.coordinate)
        logger.info(f"{len(located)} workers within {max_distance} km")

    results = [
        ScoredWorker(
            worker=worker,
            distance_km=distance,
            relevance=relevance_score(worker, criteria.skills, matcher),
        )
        for worker, distance in located
    ]

    return rank_results(
        results, criteria.sort_by, criteria.sort_order, by_distance=origin is not None
    )
