"""Search service wiring repositories, geocoding and the matching pipelines.

Page-level code talks to this layer only. Collaborators are passed in, so the
pipelines never construct a data-access or geocoding client themselves.
"""

import logging
from datetime import datetime

from connectwork.config import DEFAULT_MIN_MATCH_SCORE
from connectwork.db.repository import CandidateRepository
from connectwork.geo.geocoder import Geocoder, describe_coordinate_or_default
from connectwork.matching.jobs import search_jobs
from connectwork.matching.ranker import rank_jobs_for_worker, rank_workers_for_job
from connectwork.matching.workers import search_workers
from connectwork.schemas.criteria import JobSearchCriteria, WorkerSearchCriteria
from connectwork.schemas.location import Coordinate
from connectwork.schemas.match import ScoredJob, ScoredWorker

logger = logging.getLogger(__name__)


def find_jobs(
    repository: CandidateRepository,
    criteria: JobSearchCriteria | None = None,
    geocoder: Geocoder | None = None,
    now: datetime | None = None,
) -> list[ScoredJob]:
    """Fetch candidate jobs and run the job search pipeline.

    Args:
        repository: Source of candidate jobs.
        criteria: Search criteria (None matches every open job).
        geocoder: Geocoder for resolving criteria.location.
        now: Reference time for the posted-date window.

    Returns:
        Sorted list of ScoredJob objects.
    """
    criteria = criteria or JobSearchCriteria()
    jobs = repository.fetch_candidate_jobs(criteria)

    if not jobs:
        logger.warning("No candidate jobs found")
        return []

    results = search_jobs(jobs, criteria, geocoder=geocoder, now=now)
    logger.info(f"Job search returned {len(results)} of {len(jobs)} jobs")
    return results


def find_workers(
    repository: CandidateRepository,
    criteria: WorkerSearchCriteria | None = None,
    geocoder: Geocoder | None = None,
) -> list[ScoredWorker]:
    """Fetch candidate workers and run the worker search pipeline."""
    criteria = criteria or WorkerSearchCriteria()
    workers = repository.fetch_candidate_workers(criteria)

    if not workers:
        logger.warning("No candidate workers found")
        return []

    results = search_workers(workers, criteria, geocoder=geocoder)
    logger.info(f"Worker search returned {len(results)} of {len(workers)} workers")
    return results


def find_workers_for_job(
    repository: CandidateRepository,
    required_skills: list[str],
    min_score: float = DEFAULT_MIN_MATCH_SCORE,
    top_n: int | None = None,
) -> list[ScoredWorker]:
    """Recommend workers for a job's required skills."""
    workers = repository.fetch_candidate_workers(WorkerSearchCriteria())
    return rank_workers_for_job(workers, required_skills, min_score=min_score, top_n=top_n)


def find_jobs_for_worker(
    repository: CandidateRepository,
    worker_skills: list[str],
    min_score: float = DEFAULT_MIN_MATCH_SCORE,
    top_n: int | None = None,
) -> list[ScoredJob]:
    """Recommend open jobs matching a worker's skills."""
    jobs = repository.fetch_candidate_jobs(JobSearchCriteria())
    return rank_jobs_for_worker(jobs, worker_skills, min_score=min_score, top_n=top_n)


def describe_search_origin(
    criteria: JobSearchCriteria | WorkerSearchCriteria,
    geocoder: Geocoder | None,
) -> str | None:
    """Label for where a search is centred, for display next to the results.

    Never raises: reverse geocoding failures fall back to a generic label.
    """
    if criteria.location:
        return criteria.location
    coordinates: Coordinate | None = criteria.coordinates
    if coordinates is None:
        return None
    if geocoder is None:
        return f"{coordinates.lat:.4f}, {coordinates.lon:.4f}"
    return describe_coordinate_or_default(geocoder, coordinates)
