"""Tests for the search service layer."""

from connectwork.schemas.criteria import JobSearchCriteria, WorkerSearchCriteria
from connectwork.services.search_service import (
    describe_search_origin,
    find_jobs,
    find_jobs_for_worker,
    find_workers,
    find_workers_for_job,
)
from tests.test_utils import MOMBASA, NAIROBI, NOW, WESTLANDS, make_test_job, make_test_worker


class InMemoryRepository:
    def __init__(self, jobs=None, workers=None):
        self.jobs = jobs or []
        self.workers = workers or []
        self.job_criteria = []
        self.worker_criteria = []

    def fetch_candidate_jobs(self, criteria):
        self.job_criteria.append(criteria)
        return list(self.jobs)

    def fetch_candidate_workers(self, criteria):
        self.worker_criteria.append(criteria)
        return list(self.workers)


class TestFindJobs:
    def test_runs_pipeline_on_fetched_jobs(self, geocoder):
        repository = InMemoryRepository(
            jobs=[
                make_test_job("near", coordinate=WESTLANDS),
                make_test_job("far", coordinate=MOMBASA),
            ]
        )
        criteria = JobSearchCriteria(location="Nairobi", max_distance_km=25)

        results = find_jobs(repository, criteria, geocoder=geocoder, now=NOW)

        assert [r.job.id for r in results] == ["near"]
        assert repository.job_criteria == [criteria]

    def test_empty_repository(self):
        assert find_jobs(InMemoryRepository()) == []

    def test_default_criteria(self):
        repository = InMemoryRepository(jobs=[make_test_job("1")])

        assert len(find_jobs(repository, now=NOW)) == 1


class TestFindWorkers:
    def test_runs_pipeline_on_fetched_workers(self):
        repository = InMemoryRepository(
            workers=[
                make_test_worker("plumber", skills=["plumbing"]),
                make_test_worker("painter", skills=["painting"]),
            ]
        )
        criteria = WorkerSearchCriteria(skills=["plumbing"])

        results = find_workers(repository, criteria)

        assert [r.worker.id for r in results] == ["plumber"]

    def test_empty_repository(self):
        assert find_workers(InMemoryRepository()) == []


class TestRecommendations:
    def test_find_workers_for_job(self):
        repository = InMemoryRepository(
            workers=[
                make_test_worker("match", skills=["tiling"], rating=5, years_experience=8),
                make_test_worker("miss", skills=["cooking"]),
            ]
        )

        results = find_workers_for_job(repository, ["tiling"])

        assert [r.worker.id for r in results] == ["match"]

    def test_find_jobs_for_worker(self):
        repository = InMemoryRepository(
            jobs=[
                make_test_job("match", required_skills=["tiling"]),
                make_test_job("miss", required_skills=["welding"]),
            ]
        )

        results = find_jobs_for_worker(repository, ["tiling"], top_n=5)

        assert [r.job.id for r in results] == ["match"]


class TestDescribeSearchOrigin:
    def test_prefers_location_text(self, geocoder):
        criteria = JobSearchCriteria(location="Kisumu", coordinates=NAIROBI)

        assert describe_search_origin(criteria, geocoder) == "Kisumu"

    def test_reverse_geocodes_coordinates(self, geocoder):
        criteria = WorkerSearchCriteria(coordinates=NAIROBI)

        assert describe_search_origin(criteria, geocoder) == "Nairobi"

    def test_falls_back_on_failure(self, failing_geocoder):
        criteria = WorkerSearchCriteria(coordinates=NAIROBI)

        assert describe_search_origin(criteria, failing_geocoder) == "Current location"

    def test_without_geocoder_formats_coordinates(self):
        criteria = WorkerSearchCriteria(coordinates=NAIROBI)

        assert describe_search_origin(criteria, None) == "-1.2864, 36.8172"

    def test_no_origin(self, geocoder):
        assert describe_search_origin(JobSearchCriteria(), geocoder) is None
