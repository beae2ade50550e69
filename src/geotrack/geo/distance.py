"""Centralized geographic distance calculations.

This module provides Haversine distance calculations on a spherical Earth.
Used for nearest-place resolution, synthetic route distances and per-tick
speed in the tracking simulator.
"""

from math import atan2, cos, radians, sin, sqrt

from geotrack.geo.coordinates import Coordinate

EARTH_RADIUS_M = 6_371_000  # Earth radius in meters

# ~9e-6 degrees per meter (1 / 111,320 m per degree of latitude)
_LAT_DEGREES_PER_METER: float = 1.0 / 111_320


def haversine_distance_m(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate the great-circle distance between two points in meters.

    Uses the Haversine formula to calculate the shortest distance over
    the Earth's surface between two points specified by latitude/longitude.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance between the two points in meters
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push a a hair above 1.0 for antipodal points
    a = min(a, 1.0)
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_M * c


def haversine_distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate the great-circle distance between two points in kilometers.

    Convenience wrapper around haversine_distance_m for use cases that
    need kilometer units (e.g., fare rates).
    """
    return haversine_distance_m(lat1, lon1, lat2, lon2) / 1000.0


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters between two coordinates.

    Symmetric, never negative, and exactly 0.0 when ``a == b``.
    """
    if a == b:
        return 0.0
    return haversine_distance_m(a.lat, a.lng, b.lat, b.lng)


def is_within_proximity(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    threshold_m: float = 50.0,
) -> bool:
    """Check if two geographic points are within a given distance threshold.

    Used to decide whether an arbitrary coordinate is close enough to a
    catalog place to be treated as that place.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees
        threshold_m: Maximum distance in meters to be considered "within proximity"

    Returns:
        True if the points are within threshold_m meters of each other
    """
    # Flat-Earth bounding box pre-check. The threshold is expanded by 1% so the
    # box never rejects a point Haversine would accept. A degree of longitude
    # shrinks with cos(lat), so the longitude band widens accordingly.
    lat_threshold = threshold_m * _LAT_DEGREES_PER_METER * 1.01
    if abs(lat2 - lat1) > lat_threshold:
        return False
    cos_lat = cos(radians(max(abs(lat1), abs(lat2))))
    if cos_lat > 1e-6 and abs(lon2 - lon1) > lat_threshold / cos_lat:
        return False

    return haversine_distance_m(lat1, lon1, lat2, lon2) <= threshold_m
