"""Candidate repositories feeding the search pipelines.

Rows arrive in the joined shape of the hosted database (nested profile,
skills and services tables). They are normalized here into typed records so
the pipelines never deal with loosely-typed rows.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from connectwork.config import JOBS_FILE, WORKERS_FILE
from connectwork.schemas.criteria import JobSearchCriteria, WorkerSearchCriteria
from connectwork.schemas.job import Job, JobStatus
from connectwork.schemas.location import Coordinate
from connectwork.schemas.worker import Worker

logger = logging.getLogger(__name__)


class CandidateRepository(Protocol):
    def fetch_candidate_jobs(self, criteria: JobSearchCriteria) -> list[Job]: ...

    def fetch_candidate_workers(self, criteria: WorkerSearchCriteria) -> list[Worker]: ...


def _coordinate_from(row: dict) -> Coordinate | None:
    """Build a coordinate from latitude/longitude columns, None if either is missing."""
    lat = row.get("latitude")
    lon = row.get("longitude")
    if lat is None or lon is None:
        return None
    return Coordinate(lat=float(lat), lon=float(lon))


def normalize_job_row(row: dict) -> dict:
    """Normalize a jobs-table row to match the Job schema.

    Args:
        row: Raw row (optionally joined with its service).

    Returns:
        Normalized dict ready for the Job model.
    """
    normalized = row.copy()

    normalized["coordinate"] = _coordinate_from(row)
    normalized.pop("latitude", None)
    normalized.pop("longitude", None)

    # Older jobs were created before required_skills existed
    if normalized.get("required_skills") is None:
        normalized["required_skills"] = []

    service = normalized.pop("service", None)
    if isinstance(service, dict) and not normalized.get("service_id"):
        normalized["service_id"] = service.get("id")

    # Identifiers may be integers or UUIDs depending on the table
    for key in ("id", "service_id", "customer_id"):
        if normalized.get(key) is not None:
            normalized[key] = str(normalized[key])

    return normalized


def normalize_worker_row(row: dict) -> dict:
    """Normalize a joined worker_profiles row to match the Worker schema.

    The row carries the public profile under "profile", skills as
    [{"skill": ...}] and services as [{"service_id": ..., "service": {...}}].
    Plain lists and flat fields are accepted too.

    Args:
        row: Raw joined row.

    Returns:
        Normalized dict ready for the Worker model.
    """
    profile = row.get("profile") or {}

    skills = []
    for entry in row.get("skills") or []:
        skill = entry.get("skill") if isinstance(entry, dict) else entry
        if skill:
            skills.append(skill)

    services = []
    for entry in row.get("services") or []:
        service = entry.get("service") or {}
        service_id = entry.get("service_id") or service.get("id")
        if service_id is None:
            continue
        services.append(
            {
                "service_id": str(service_id),
                "name": service.get("name") or entry.get("name", ""),
            }
        )

    rating = row.get("avg_rating", row.get("rating"))

    worker_id = row.get("id") or profile.get("id")
    if worker_id is None:
        raise ValueError("Worker row has no id")

    return {
        "id": str(worker_id),
        "full_name": profile.get("full_name") or row.get("full_name") or "",
        "profession": row.get("profession"),
        "hourly_rate": row.get("hourly_rate"),
        "rating": rating,
        "years_experience": row.get("years_experience"),
        "skills": skills,
        "services": services,
        "location": profile.get("location") or row.get("location"),
        "coordinate": _coordinate_from(profile) or _coordinate_from(row),
    }


class JsonFileRepository:
    """Repository reading JSON exports of the jobs and worker_profiles tables."""

    def __init__(self, jobs_file: Path = JOBS_FILE, workers_file: Path = WORKERS_FILE):
        self.jobs_file = Path(jobs_file)
        self.workers_file = Path(workers_file)

    @staticmethod
    def _load_rows(file_path: Path) -> list[dict]:
        if not file_path.exists():
            logger.warning(f"Data file not found: {file_path}")
            return []

        with open(file_path) as f:
            rows = json.load(f)

        if not isinstance(rows, list):
            raise ValueError(f"Expected a JSON array in {file_path}")
        return rows

    def fetch_candidate_jobs(self, criteria: JobSearchCriteria) -> list[Job]:
        """Load open jobs. Everything else is filtered by the pipeline."""
        jobs = [Job(**normalize_job_row(row)) for row in self._load_rows(self.jobs_file)]
        open_jobs = [job for job in jobs if job.status == JobStatus.OPEN]
        logger.info(f"Loaded {len(open_jobs)} open jobs from {self.jobs_file}")
        return open_jobs

    def fetch_candidate_workers(self, criteria: WorkerSearchCriteria) -> list[Worker]:
        workers = [
            Worker(**normalize_worker_row(row)) for row in self._load_rows(self.workers_file)
        ]
        logger.info(f"Loaded {len(workers)} workers from {self.workers_file}")
        return workers
