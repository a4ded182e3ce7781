"""Service layer for ConnectWork search and matching."""

from connectwork.services.search_service import (
    describe_search_origin,
    find_jobs,
    find_jobs_for_worker,
    find_workers,
    find_workers_for_job,
)

__all__ = [
    "describe_search_origin",
    "find_jobs",
    "find_jobs_for_worker",
    "find_workers",
    "find_workers_for_job",
]
