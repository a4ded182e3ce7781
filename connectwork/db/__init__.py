"""Candidate data access."""

from connectwork.db.repository import (
    CandidateRepository,
    JsonFileRepository,
    normalize_job_row,
    normalize_worker_row,
)

__all__ = [
    "CandidateRepository",
    "JsonFileRepository",
    "normalize_job_row",
    "normalize_worker_row",
]
