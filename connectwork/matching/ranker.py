"""Skill-based ranking of workers for a job and jobs for a worker."""

from connectwork.config import DEFAULT_MIN_MATCH_SCORE
from connectwork.matching.jobs import sort_jobs
from connectwork.matching.skills import (
    DEFAULT_MATCHER,
    SkillMatcher,
    relevance_score,
    skill_match_score,
)
from connectwork.matching.workers import rank_results
from connectwork.schemas.criteria import JobSortBy, SortOrder, WorkerSortBy
from connectwork.schemas.job import Job, JobStatus
from connectwork.schemas.match import ScoredJob, ScoredWorker
from connectwork.schemas.worker import Worker


def rank_workers_for_job(
    workers: list[Worker],
    required_skills: list[str],
    min_score: float = DEFAULT_MIN_MATCH_SCORE,
    top_n: int | None = None,
    matcher: SkillMatcher = DEFAULT_MATCHER,
) -> list[ScoredWorker]:
    """Rank workers by composite relevance to a job's required skills.

    Args:
        workers: Workers to rank.
        required_skills: Skills the job asks for.
        min_score: Minimum total relevance (0-1) to be included.
        top_n: Maximum number of results to return (None for all).
        matcher: Skill matching strategy.

    Returns:
        List of ScoredWorker objects sorted by total relevance descending,
        ties broken by name, then id.
    """
    results = []
    for worker in workers:
        relevance = relevance_score(worker, required_skills, matcher)
        if relevance.total >= min_score:
            results.append(ScoredWorker(worker=worker, relevance=relevance))

    rank_results(results, WorkerSortBy.RELEVANCE, SortOrder.DESC)

    if top_n is not None:
        results = results[:top_n]

    return results


def rank_jobs_for_worker(
    jobs: list[Job],
    worker_skills: list[str],
    min_score: float = DEFAULT_MIN_MATCH_SCORE,
    top_n: int | None = None,
    matcher: SkillMatcher = DEFAULT_MATCHER,
) -> list[ScoredJob]:
    """Rank open jobs by how well a worker's skills cover their requirements.

    Jobs without required skills score 1 and therefore always qualify.

    Returns:
        List of ScoredJob objects sorted by skill_match_score descending,
        ties broken by newest first, then id.
    """
    results = []
    for job in jobs:
        if job.status != JobStatus.OPEN:
            continue
        score = skill_match_score(worker_skills, job.required_skills, matcher)
        if score >= min_score:
            results.append(ScoredJob(job=job, skill_match_score=score))

    sort_jobs(results, JobSortBy.RELEVANCE, SortOrder.DESC)

    if top_n is not None:
        results = results[:top_n]

    return results
