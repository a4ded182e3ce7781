"""Shared pytest fixtures for all tests."""

import pytest

from tests.test_utils import FakeGeocoder, TimeoutGeocoder


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def failing_geocoder():
    return FakeGeocoder(fail=True)


@pytest.fixture
def timeout_geocoder():
    return TimeoutGeocoder()
