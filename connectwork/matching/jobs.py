"""Job search pipeline: filter, geo-filter and sort job postings."""

import calendar
import logging
from datetime import UTC, datetime, timedelta

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
    skill_match_score,
)
from connectwork.schemas.criteria import (
    DatePosted,
    JobSearchCriteria,
    JobSortBy,
    SortOrder,
)
from connectwork.schemas.job import Job, JobStatus, UrgencyLevel
from connectwork.schemas.match import ScoredJob

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _subtract_month(value: datetime) -> datetime:
    """Same day one calendar month earlier, clamped to the month's last day."""
    year, month = (value.year, value.month - 1) if value.month > 1 else (value.year - 1, 12)
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def posted_since(date_posted: DatePosted | None, now: datetime) -> datetime | None:
    """Start of the posted-date window, or None when there is no window."""
    if date_posted == DatePosted.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_posted == DatePosted.WEEK:
        return now - timedelta(days=7)
    if date_posted == DatePosted.MONTH:
        return _subtract_month(now)
    return None


def filter_open(jobs: list[Job]) -> list[Job]:
    return [job for job in jobs if job.status == JobStatus.OPEN]


def filter_by_service(jobs: list[Job], service_ids: list[str]) -> list[Job]:
    if not service_ids:
        return jobs
    allowed = set(service_ids)
    return [job for job in jobs if job.service_id in allowed]


def filter_by_budget(
    jobs: list[Job],
    min_budget: float | None,
    max_budget: float | None,
) -> list[Job]:
    """Keep jobs whose budget range overlaps the requested range.

    A job with a wide range can match a narrow filter and vice versa.
    """
    results = []
    for job in jobs:
        if min_budget is not None and job.budget_max < min_budget:
            continue
        if max_budget is not None and job.budget_min > max_budget:
            continue
        results.append(job)
    return results


def filter_by_urgency(jobs: list[Job], urgency: list[UrgencyLevel]) -> list[Job]:
    if not urgency:
        return jobs
    allowed = set(urgency)
    return [job for job in jobs if job.urgency_level in allowed]


def filter_by_date_posted(
    jobs: list[Job],
    date_posted: DatePosted | None,
    now: datetime,
) -> list[Job]:
    since = posted_since(date_posted, now)
    if since is None:
        return jobs
    since = _as_utc(since)
    return [job for job in jobs if _as_utc(job.created_at) >= since]


def filter_by_query(jobs: list[Job], query: str | None) -> list[Job]:
    return [job for job in jobs if text_contains(query, job.title, job.description)]


def filter_by_required_skills(jobs: list[Job], skills: list[str]) -> list[Job]:
    """Keep jobs asking for any of the given skills.

    Jobs that list no required skills are open to everyone and always kept.
    """
    wanted = normalize_skills(skills)
    if not wanted:
        return jobs
    return [
        job
        for job in jobs
        if not job.required_skills or has_any_skill(job.required_skills, wanted)
    ]


def sort_jobs(
    results: list[ScoredJob],
    sort_by: JobSortBy | None,
    sort_order: SortOrder | None,
) -> list[ScoredJob]:
    """Sort scored jobs in place and return them.

    Ties are broken by newest first, then id.
    """
    descending = sort_order != SortOrder.ASC

    results.sort(key=lambda r: r.job.id)
    results.sort(key=lambda r: _as_utc(r.job.created_at), reverse=True)

    if sort_by == JobSortBy.BUDGET:
        results.sort(key=lambda r: r.job.budget_midpoint, reverse=descending)
    elif sort_by == JobSortBy.RELEVANCE and all(r.skill_match_score is not None for r in results):
        results.sort(key=lambda r: r.skill_match_score, reverse=descending)
    else:
        results.sort(key=lambda r: _as_utc(r.job.created_at), reverse=descending)

    return results


def search_jobs(
    jobs: list[Job],
    criteria: JobSearchCriteria | None = None,
    geocoder: Geocoder | None = None,
    now: datetime | None = None,
    matcher: SkillMatcher = DEFAULT_MATCHER,
) -> list[ScoredJob]:
    """Filter and sort job postings.

    Pipeline: status -> service -> budget -> urgency -> date -> query ->
    skills -> distance -> sort. Geocoding failures disable the distance step
    instead of failing the search.

    Args:
        jobs: Candidate jobs fetched from the store.
        criteria: Search criteria (None matches every open job).
        geocoder: Geocoder used when criteria.location must be resolved.
        now: Reference time for the posted-date window (defaults to now, UTC).
        matcher: Skill matching strategy for relevance sorting.

    Returns:
        List of ScoredJob objects.

    Raises:
        InvalidCriteria: If criteria bounds are contradictory.
    """
    criteria = criteria or JobSearchCriteria()
    criteria.check()
    now = now or datetime.now(UTC)

    candidates = filter_open(jobs)
    candidates = filter_by_service(candidates, criteria.service_ids)
    candidates = filter_by_budget(candidates, criteria.min_budget, criteria.max_budget)
    candidates = filter_by_urgency(candidates, criteria.urgency)
    candidates = filter_by_date_posted(candidates, criteria.date_posted, now)
    candidates = filter_by_query(candidates, criteria.query)
    candidates = filter_by_required_skills(candidates, criteria.required_skills)
    logger.info(f"{len(candidates)} of {len(jobs)} jobs passed attribute filters")

    results = [ScoredJob(job=job) for job in candidates]

    if criteria.max_distance_km is not None:
        origin = resolve_search_origin(criteria.coordinates, criteria.location, geocoder)
        if origin is not None:
            within = filter_by_distance(
                candidates, origin, criteria.max_distance_km, lambda job: job.coordinate
            )
            results = [ScoredJob(job=job, distance_km=distance) for job, distance in within]
            logger.info(f"{len(results)} jobs within {criteria.max_distance_km} km")

    if criteria.sort_by == JobSortBy.RELEVANCE and normalize_skills(criteria.required_skills):
        for result in results:
            result.skill_match_score = skill_match_score(
                criteria.required_skills, result.job.required_skills, matcher
            )

    return sort_jobs(results, criteria.sort_by, criteria.sort_order)
