"""Tests for great-circle distance helpers."""

import math

import pytest

from connectwork.geo.distance import degrees_to_radians, distance_between, haversine_distance_km
from tests.test_utils import MOMBASA, NAIROBI, THIKA, WESTLANDS


class TestDegreesToRadians:
    def test_half_turn(self):
        assert math.isclose(degrees_to_radians(180), math.pi)

    def test_zero(self):
        assert degrees_to_radians(0) == 0

    def test_negative(self):
        assert math.isclose(degrees_to_radians(-90), -math.pi / 2)


class TestHaversineDistanceKm:
    def test_same_point_is_zero(self):
        assert haversine_distance_km(NAIROBI.lat, NAIROBI.lon, NAIROBI.lat, NAIROBI.lon) == 0

    def test_symmetric(self):
        there = haversine_distance_km(NAIROBI.lat, NAIROBI.lon, MOMBASA.lat, MOMBASA.lon)
        back = haversine_distance_km(MOMBASA.lat, MOMBASA.lon, NAIROBI.lat, NAIROBI.lon)

        assert there == back

    def test_one_degree_of_latitude(self):
        # 6371 * pi / 180
        assert haversine_distance_km(0, 0, 1, 0) == pytest.approx(111.195, abs=0.01)

    def test_nairobi_to_mombasa(self):
        distance = haversine_distance_km(NAIROBI.lat, NAIROBI.lon, MOMBASA.lat, MOMBASA.lon)

        assert 420 < distance < 460

    def test_monotonic_with_separation(self):
        distances = [haversine_distance_km(0, 0, 0, lon) for lon in (1, 5, 20, 90)]

        assert distances == sorted(distances)
        assert len(set(distances)) == len(distances)

    def test_antipodal_points(self):
        distance = haversine_distance_km(0, 0, 0, 180)

        assert distance == pytest.approx(math.pi * 6371, rel=1e-9)


class TestDistanceBetween:
    def test_matches_haversine(self):
        expected = haversine_distance_km(NAIROBI.lat, NAIROBI.lon, THIKA.lat, THIKA.lon)

        assert distance_between(NAIROBI, THIKA) == expected

    def test_nearby_suburb(self):
        assert distance_between(NAIROBI, WESTLANDS) < 5

    def test_nearby_town(self):
        assert 30 < distance_between(NAIROBI, THIKA) < 50
