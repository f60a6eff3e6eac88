import math

import pytest

from places_search.requery.geo import EARTH_RADIUS_METERS, distance_between, haversine_meters
from places_search.requery.models import LatLng


def test_identical_points_are_zero():
    assert haversine_meters(32.0853, 34.7818, 32.0853, 34.7818) == 0.0


def test_one_degree_of_longitude_on_equator():
    expected = EARTH_RADIUS_METERS * math.radians(1)
    assert haversine_meters(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected, rel=1e-9)


def test_small_latitude_shift_in_meters():
    # Roughly 50 m north
    delta = 0.00045
    expected = EARTH_RADIUS_METERS * math.radians(delta)
    assert haversine_meters(32.0, 34.0, 32.0 + delta, 34.0) == pytest.approx(expected, rel=1e-6)


def test_quarter_of_the_globe():
    expected = EARTH_RADIUS_METERS * math.pi / 2
    assert haversine_meters(0.0, 0.0, 0.0, 90.0) == pytest.approx(expected, rel=1e-9)


def test_pole_to_pole_is_half_circumference():
    expected = EARTH_RADIUS_METERS * math.pi
    assert haversine_meters(90.0, 0.0, -90.0, 0.0) == pytest.approx(expected, rel=1e-9)


def test_distance_is_symmetric():
    a = haversine_meters(32.0853, 34.7818, 31.7683, 35.2137)
    b = haversine_meters(31.7683, 35.2137, 32.0853, 34.7818)
    assert a == pytest.approx(b)
    assert 40_000 < a < 70_000


def test_distance_between_latlng():
    a = LatLng(lat=0.0, lng=0.0)
    b = LatLng(lat=0.0, lng=1.0)
    assert distance_between(a, b) == haversine_meters(0.0, 0.0, 0.0, 1.0)
