import math

import pytest
from pydantic import ValidationError

from api.geo.geo_schema import Coordinate
from api.geo.geo_service import (
    DEFAULT_RADIUS_METERS,
    EARTH_RADIUS_METERS,
    haversine_distance,
    verify_geofence,
)

PAIRS = [
    (Coordinate(latitude=0, longitude=0), Coordinate(latitude=0, longitude=1)),
    (Coordinate(latitude=18.516726, longitude=73.856255), Coordinate(latitude=18.52, longitude=73.86)),
    (Coordinate(latitude=-33.8688, longitude=151.2093), Coordinate(latitude=51.5074, longitude=-0.1278)),
    (Coordinate(latitude=89.9, longitude=-179.9), Coordinate(latitude=-89.9, longitude=179.9)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric_non_negative_int(a, b):
    d = haversine_distance(a, b)
    assert d == haversine_distance(b, a)
    assert isinstance(d, int)
    assert d >= 0


@pytest.mark.parametrize("a,_", PAIRS)
def test_distance_to_self_is_zero(a, _):
    assert haversine_distance(a, a) == 0


def test_one_degree_of_longitude_at_equator():
    d = haversine_distance(Coordinate(latitude=0, longitude=0), Coordinate(latitude=0, longitude=1))
    assert abs(d - 111195) <= 1


def test_antipodal_points_do_not_raise():
    d = haversine_distance(Coordinate(latitude=0, longitude=0), Coordinate(latitude=0, longitude=180))
    assert d == round(math.pi * EARTH_RADIUS_METERS)


def test_non_finite_input_propagates_nan():
    bogus = Coordinate.model_construct(latitude=float("nan"), longitude=0.0)
    assert math.isnan(haversine_distance(bogus, Coordinate(latitude=0, longitude=0)))

    infinite = Coordinate.model_construct(latitude=0.0, longitude=float("inf"))
    assert math.isnan(haversine_distance(infinite, Coordinate(latitude=0, longitude=0)))


def test_verify_boundary_is_inclusive():
    origin = Coordinate(latitude=18.516726, longitude=73.856255)
    claimant = Coordinate(latitude=18.5171, longitude=73.8565)
    d = haversine_distance(claimant, origin)

    at_edge = verify_geofence(claimant, origin, d)
    assert at_edge.admitted is True
    assert at_edge.distance_meters == d

    just_outside = verify_geofence(claimant, origin, d - 1)
    assert just_outside.admitted is False
    assert just_outside.allowed_meters == d - 1


@pytest.mark.parametrize("radius", [None, 0, -10])
def test_missing_or_non_positive_radius_uses_default(radius):
    origin = Coordinate(latitude=0, longitude=0)
    verdict = verify_geofence(origin, origin, radius)
    assert verdict.allowed_meters == DEFAULT_RADIUS_METERS == 50
    assert verdict.admitted is True


def test_default_radius_rejects_claimant_beyond_fifty_meters():
    origin = Coordinate(latitude=0, longitude=0)
    # ~55 m north
    claimant = Coordinate(latitude=math.degrees(55 / EARTH_RADIUS_METERS), longitude=0)
    verdict = verify_geofence(claimant, origin)
    assert verdict.distance_meters == 55
    assert verdict.admitted is False


@pytest.mark.parametrize(
    "lat,lon",
    [(90.1, 0), (-91, 0), (0, 180.5), (0, -181), (float("nan"), 0), (0, float("inf"))],
)
def test_coordinate_rejects_out_of_range_and_non_finite(lat, lon):
    with pytest.raises(ValidationError):
        Coordinate(latitude=lat, longitude=lon)


def test_coordinate_is_immutable():
    c = Coordinate(latitude=1, longitude=2)
    with pytest.raises(ValidationError):
        c.latitude = 3


def test_half_meter_distance_rounds_up():
    origin = Coordinate(latitude=0, longitude=0)
    # exactly 2.5 m north of the origin
    claimant = Coordinate(latitude=2.2483040147968264e-05, longitude=0)

    assert haversine_distance(claimant, origin) == 3
    verdict = verify_geofence(claimant, origin, 2)
    assert verdict.distance_meters == 3
    assert verdict.admitted is False
