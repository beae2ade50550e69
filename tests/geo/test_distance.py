"""Tests for the centralized distance utility."""

import pytest
from pydantic import ValidationError

from geotrack.geo.coordinates import Coordinate
from geotrack.geo.distance import (
    _LAT_DEGREES_PER_METER,
    EARTH_RADIUS_M,
    distance,
    haversine_distance_km,
    haversine_distance_m,
    is_within_proximity,
)


@pytest.mark.unit
class TestHaversineDistanceM:
    """Tests for haversine_distance_m function."""

    def test_same_point_returns_zero(self) -> None:
        lat, lon = 34.0522, -118.2437  # Downtown Los Angeles
        assert haversine_distance_m(lat, lon, lat, lon) == pytest.approx(0.0, abs=0.001)

    def test_one_degree_longitude_at_equator(self) -> None:
        """1 degree of longitude at the equator is ~111,195 m on a 6,371 km sphere."""
        d = haversine_distance_m(0.0, 0.0, 0.0, 1.0)
        assert d == pytest.approx(111_195, abs=1.0)

    def test_known_distance_los_angeles_to_san_francisco(self) -> None:
        """Downtown LA to downtown SF is roughly 560 km in a straight line."""
        distance_km = haversine_distance_m(34.0522, -118.2437, 37.7749, -122.4194) / 1000
        assert 550 <= distance_km <= 570

    def test_short_distance_accuracy(self) -> None:
        """~0.0009 degrees of latitude is about 100 m."""
        d = haversine_distance_m(34.0522, -118.2437, 34.0531, -118.2437)
        assert 90 <= d <= 110

    def test_symmetry(self) -> None:
        d_ab = haversine_distance_m(34.0522, -118.2437, 34.0085, -118.4985)
        d_ba = haversine_distance_m(34.0085, -118.4985, 34.0522, -118.2437)
        assert d_ab == pytest.approx(d_ba, rel=1e-9)

    def test_across_equator(self) -> None:
        d = haversine_distance_m(1.0, -118.0, -1.0, -118.0)
        assert 220_000 <= d <= 225_000

    def test_antipodal_points(self) -> None:
        """Half the circumference, without a math domain error."""
        d = haversine_distance_m(0.0, 0.0, 0.0, 180.0)
        assert d == pytest.approx(EARTH_RADIUS_M * 3.141592653589793, rel=1e-9)


@pytest.mark.unit
class TestHaversineDistanceKm:
    def test_returns_km_not_m(self) -> None:
        d_m = haversine_distance_m(34.0522, -118.2437, 34.0085, -118.4985)
        d_km = haversine_distance_km(34.0522, -118.2437, 34.0085, -118.4985)
        assert d_km == pytest.approx(d_m / 1000, rel=1e-9)


@pytest.mark.unit
class TestCoordinateDistance:
    """Tests for the Coordinate-level distance function."""

    def test_zero_for_equal_coordinates(self) -> None:
        a = Coordinate(lat=34.0522, lng=-118.2437)
        assert distance(a, Coordinate(lat=34.0522, lng=-118.2437)) == 0.0

    def test_positive_for_distinct_coordinates(self) -> None:
        a = Coordinate(lat=34.0522, lng=-118.2437)
        b = Coordinate(lat=34.0522, lng=-118.2436)
        assert distance(a, b) > 0.0

    def test_symmetric(self) -> None:
        a = Coordinate(lat=-33.8688, lng=151.2093)
        b = Coordinate(lat=51.5074, lng=-0.1278)
        assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-12)

    def test_matches_float_primitive(self) -> None:
        a = Coordinate(lat=0.0, lng=0.0)
        b = Coordinate(lat=0.0, lng=1.0)
        assert distance(a, b) == pytest.approx(haversine_distance_m(0.0, 0.0, 0.0, 1.0))

    def test_out_of_range_coordinate_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Coordinate(lat=91.0, lng=0.0)
        with pytest.raises(ValidationError):
            Coordinate(lat=0.0, lng=-180.5)


@pytest.mark.unit
class TestIsWithinProximity:
    def test_same_point_within_any_threshold(self) -> None:
        lat, lon = 34.0522, -118.2437
        assert is_within_proximity(lat, lon, lat, lon, threshold_m=1.0)
        assert is_within_proximity(lat, lon, lat, lon, threshold_m=0.0)

    def test_within_50m_threshold(self) -> None:
        # ~30 m north
        assert is_within_proximity(34.0522, -118.2437, 34.05247, -118.2437, threshold_m=50.0)

    def test_outside_50m_threshold(self) -> None:
        # ~100 m north
        assert not is_within_proximity(34.0522, -118.2437, 34.0531, -118.2437, threshold_m=50.0)

    def test_default_threshold_is_50m(self) -> None:
        assert is_within_proximity(34.0522, -118.2437, 34.05247, -118.2437)

    def test_far_away_point_rejected_by_lat_check(self) -> None:
        lat1, lon1 = 34.0522, -118.2437
        assert not is_within_proximity(lat1, lon1, lat1 + 0.09, lon1, threshold_m=50.0)

    def test_far_away_point_rejected_by_lon_check(self) -> None:
        lat1, lon1 = 34.0522, -118.2437
        assert not is_within_proximity(lat1, lon1, lat1, lon1 + 0.09, threshold_m=50.0)

    def test_east_west_neighbor_at_high_latitude_accepted(self) -> None:
        """At 60 degrees a degree of longitude is half as long; 40 m east still matches."""
        lat = 60.0
        lon_offset = 40.0 * _LAT_DEGREES_PER_METER * 2  # ~40 m at cos(60) = 0.5
        actual = haversine_distance_m(lat, 10.0, lat, 10.0 + lon_offset)
        assert actual < 50.0
        assert is_within_proximity(lat, 10.0, lat, 10.0 + lon_offset, threshold_m=50.0)

    def test_matches_haversine_near_boundary(self) -> None:
        lat1, lon1 = 34.0522, -118.2437
        for offset in (0.0004, 0.00045, 0.0005, 0.0006):
            expected = haversine_distance_m(lat1, lon1, lat1, lon1 + offset) <= 50.0
            assert is_within_proximity(lat1, lon1, lat1, lon1 + offset, 50.0) == expected


@pytest.mark.unit
def test_earth_radius_value() -> None:
    assert EARTH_RADIUS_M == 6_371_000
