"""Tests for the worker search pipeline."""

import pytest

from connectwork.matching.workers import (
    filter_by_rate,
    filter_by_rating,
    filter_by_skills,
    search_workers,
)
from connectwork.schemas.criteria import InvalidCriteria, WorkerSearchCriteria
from tests.test_utils import MOMBASA, NAIROBI, THIKA, WESTLANDS, make_test_worker


def ids(results):
    return [r.worker.id for r in results]


class TestFilterByRating:
    def test_floor(self):
        workers = [make_test_worker("good", rating=4.5), make_test_worker("meh", rating=3.0)]

        assert [w.id for w in filter_by_rating(workers, 4)] == ["good"]

    def test_unrated_workers_fail_positive_floor(self):
        workers = [make_test_worker("new")]

        assert filter_by_rating(workers, 1) == []

    def test_zero_floor_keeps_unrated(self):
        workers = [make_test_worker("new"), make_test_worker("zero", rating=0)]

        assert len(filter_by_rating(workers, 0)) == 2

    def test_negative_floor_keeps_unrated(self):
        assert len(filter_by_rating([make_test_worker("new")], -1)) == 1


class TestFilterByRate:
    def test_range(self):
        workers = [
            make_test_worker("cheap", hourly_rate=300),
            make_test_worker("mid", hourly_rate=800),
            make_test_worker("pricey", hourly_rate=2000),
        ]

        assert [w.id for w in filter_by_rate(workers, 500, 1000)] == ["mid"]

    def test_workers_without_rate_fail_active_bound(self):
        workers = [make_test_worker("unset")]

        assert filter_by_rate(workers, 0, None) == []

    def test_no_bounds_keeps_everyone(self):
        workers = [make_test_worker("unset")]

        assert filter_by_rate(workers, None, None) == workers


class TestFilterBySkills:
    def test_or_semantics(self):
        workers = [
            make_test_worker("plumber", skills=["Plumbing"]),
            make_test_worker("painter", skills=["painting"]),
            make_test_worker("welder", skills=["welding"]),
        ]

        results = filter_by_skills(workers, ["plumbing", "painting"])

        assert [w.id for w in results] == ["plumber", "painter"]

    def test_workers_without_skills_excluded(self):
        assert filter_by_skills([make_test_worker("blank")], ["plumbing"]) == []

    def test_blank_requested_skills_keep_everyone(self):
        workers = [make_test_worker("painter", skills=["painting"]), make_test_worker("new")]

        assert filter_by_skills(workers, ["  "]) == workers


class TestSearchWorkers:
    def test_empty_criteria_returns_everyone(self):
        workers = [make_test_worker("1"), make_test_worker("2")]

        assert sorted(ids(search_workers(workers))) == ["1", "2"]

    def test_query_matches_name_profession_and_services(self):
        workers = [
            make_test_worker("name", full_name="Peter Plumber"),
            make_test_worker("prof", full_name="Ann", profession="Master plumber"),
            make_test_worker("svc", full_name="Joe", services=[("s1", "Plumbing repairs")]),
            make_test_worker("other", full_name="Mary", profession="Electrician"),
        ]
        criteria = WorkerSearchCriteria(query="PLUMB")

        assert sorted(ids(search_workers(workers, criteria))) == ["name", "prof", "svc"]

    def test_service_filter(self):
        workers = [
            make_test_worker("1", services=[("cleaning", "Cleaning"), ("plumbing", "Plumbing")]),
            make_test_worker("2", services=[("cleaning", "Cleaning")]),
        ]
        criteria = WorkerSearchCriteria(service_ids=["plumbing"])

        assert ids(search_workers(workers, criteria)) == ["1"]

    def test_geo_filter_sorts_by_distance(self):
        workers = [
            make_test_worker("thika", coordinate=THIKA, rating=5, years_experience=20),
            make_test_worker("westlands", coordinate=WESTLANDS),
            make_test_worker("cbd", coordinate=NAIROBI),
            make_test_worker("mombasa", coordinate=MOMBASA),
        ]
        criteria = WorkerSearchCriteria(coordinates=NAIROBI, max_distance_km=50, sort_by="rating")

        results = search_workers(workers, criteria)

        assert ids(results) == ["cbd", "westlands", "thika"]
        distances = [r.distance_km for r in results]
        assert distances == sorted(distances)

    def test_geo_filter_excludes_workers_without_coordinates(self):
        workers = [make_test_worker("nowhere", rating=5)]
        criteria = WorkerSearchCriteria(coordinates=NAIROBI, max_distance_km=20_000)

        assert search_workers(workers, criteria) == []

    def test_default_radius_applies_to_location_searches(self, geocoder):
        workers = [
            make_test_worker("thika", coordinate=THIKA),
            make_test_worker("mombasa", coordinate=MOMBASA),
        ]
        criteria = WorkerSearchCriteria(location="Nairobi")

        assert ids(search_workers(workers, criteria, geocoder=geocoder)) == ["thika"]

    def test_geocoding_failure_degrades_to_unfiltered(self, failing_geocoder):
        workers = [
            make_test_worker("rated", rating=4.0, coordinate=MOMBASA),
            make_test_worker("nowhere", rating=4.5),
            make_test_worker("low", rating=2.0),
        ]
        criteria = WorkerSearchCriteria(location="Nairobi", max_distance_km=5, min_rating=3)

        results = search_workers(workers, criteria, geocoder=failing_geocoder)

        assert sorted(ids(results)) == ["nowhere", "rated"]
        assert all(r.distance_km is None for r in results)

    def test_ranked_by_relevance_by_default(self):
        workers = [
            make_test_worker("novice", skills=["painting"], years_experience=1, rating=3),
            make_test_worker("expert", skills=["painting"], years_experience=12, rating=5),
            make_test_worker("other", skills=["welding"], years_experience=12, rating=5),
        ]
        criteria = WorkerSearchCriteria(skills=["painting", "welding"])

        results = search_workers(workers, criteria)

        assert ids(results) == ["expert", "other", "novice"]
        assert results[0].relevance.total == pytest.approx(0.75)
        assert results[0].skill_match_score == pytest.approx(0.5)

    def test_sort_by_rate_ascending(self):
        workers = [
            make_test_worker("b", hourly_rate=900),
            make_test_worker("a", hourly_rate=400),
            make_test_worker("c", hourly_rate=600),
        ]
        criteria = WorkerSearchCriteria(sort_by="rate", sort_order="asc")

        assert ids(search_workers(workers, criteria)) == ["a", "c", "b"]

    def test_sort_by_rating_puts_unrated_last(self):
        workers = [
            make_test_worker("new"),
            make_test_worker("good", rating=4.8),
            make_test_worker("ok", rating=3.9),
        ]
        criteria = WorkerSearchCriteria(sort_by="rating")

        assert ids(search_workers(workers, criteria)) == ["good", "ok", "new"]

    def test_ties_broken_by_name(self):
        workers = [
            make_test_worker("2", full_name="zara"),
            make_test_worker("1", full_name="Abel"),
        ]

        assert ids(search_workers(workers)) == ["1", "2"]

    def test_contradictory_rates_raise(self):
        criteria = WorkerSearchCriteria(min_rate=1000, max_rate=10)

        with pytest.raises(InvalidCriteria):
            search_workers([make_test_worker("1")], criteria)

    def test_out_of_range_rating_raises(self):
        with pytest.raises(InvalidCriteria):
            search_workers([], WorkerSearchCriteria(min_rating=7))

    def test_geocoder_timeout_degrades_to_unfiltered(self, timeout_geocoder):
        workers = [make_test_worker("far", coordinate=MOMBASA)]
        criteria = WorkerSearchCriteria(location="Nairobi")

        results = search_workers(workers, criteria, geocoder=timeout_geocoder)

        assert ids(results) == ["far"]
        assert results[0].distance_km is None

    def test_blank_skill_filter_matches_everything(self):
        workers = [make_test_worker("painter", skills=["painting"])]
        criteria = WorkerSearchCriteria(skills=["  "])

        assert ids(search_workers(workers, criteria)) == ["painter"]
