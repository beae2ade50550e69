"""Path geometry helpers: headings, interpolation and cumulative distances."""

import math
from collections.abc import Sequence

from geotrack.geo.coordinates import Coordinate
from geotrack.geo.distance import distance


def calculate_heading(
    from_coords: tuple[float, float], to_coords: tuple[float, float]
) -> float:
    """Initial great-circle heading in degrees [0, 360) between (lat, lon) tuples."""
    lat1, lon1 = math.radians(from_coords[0]), math.radians(from_coords[1])
    lat2, lon2 = math.radians(to_coords[0]), math.radians(to_coords[1])

    dlon = lon2 - lon1

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    bearing_rad = math.atan2(y, x)
    bearing_deg = (math.degrees(bearing_rad) + 360) % 360

    # (-tiny + 360) % 360 can round to exactly 360.0
    return 0.0 if bearing_deg >= 360.0 else bearing_deg


def bearing(a: Coordinate, b: Coordinate) -> float:
    """Compass heading (0 = north, 90 = east) travelling from a towards b.

    Coincident points have no defined heading; 0.0 is returned.
    """
    if a == b:
        return 0.0
    return calculate_heading(a.as_tuple(), b.as_tuple())


def interpolate(a: Coordinate, b: Coordinate, fraction: float) -> Coordinate:
    """Linear interpolation in lat/lng space.

    Not geodesic-accurate; this is a cheap simulation aid. ``fraction`` is
    clamped to [0, 1] and the endpoints are returned exactly.
    """
    if fraction <= 0.0:
        return a
    if fraction >= 1.0:
        return b
    return Coordinate(
        lat=a.lat + (b.lat - a.lat) * fraction,
        lng=a.lng + (b.lng - a.lng) * fraction,
    )


def precompute_headings(path: Sequence[Coordinate]) -> list[float]:
    """Precompute one heading per path vertex.

    Index i gives the heading when traveling from path[i] to path[i+1]. The
    final vertex has no next point and repeats the previous heading, so the
    result always has the same length as ``path``. A coincident pair keeps
    the heading of the vertex before it.
    """
    if not path:
        return []

    headings: list[float] = []
    previous = 0.0
    for i in range(len(path) - 1):
        if path[i] == path[i + 1]:
            heading = previous
        else:
            heading = bearing(path[i], path[i + 1])
        headings.append(heading)
        previous = heading

    headings.append(previous)
    return headings


def precompute_cumulative_distances(path: Sequence[Coordinate]) -> list[float]:
    """Precompute cumulative Haversine distances along a path.

    Returns a list of length len(path) - 1 where entry i is the
    cumulative distance from path[0] to path[i+1] in meters.
    Returns empty list for paths shorter than 2 points.
    """
    if len(path) < 2:
        return []

    cumulative: list[float] = []
    total = 0.0
    for i in range(len(path) - 1):
        total += distance(path[i], path[i + 1])
        cumulative.append(total)
    return cumulative


def path_length_m(path: Sequence[Coordinate]) -> float:
    """Total length of a path in meters."""
    cumulative = precompute_cumulative_distances(path)
    return cumulative[-1] if cumulative else 0.0
