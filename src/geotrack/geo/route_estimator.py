"""Degraded-mode route estimation without a live routing provider.

Estimates are approximate. Curated corridors carry hand-tuned distance and
duration pairs for common routes; everything else is derived from the
straight-line distance and a fixed average urban speed. Outputs are suitable
for display and fare previews, not for billing-grade precision unless the
corridor has a human-reviewed curated entry.
"""

import logging
import math
import random

from pydantic import BaseModel, ConfigDict, Field

from geotrack.geo.coordinates import Coordinate
from geotrack.geo.distance import distance, is_within_proximity
from geotrack.geo.formatting import format_distance, format_duration
from geotrack.geo.geometry import interpolate
from geotrack.geo.places import PlaceCatalog, PlaceRecord
from geotrack.settings import RouteSettings

logger = logging.getLogger(__name__)


class RouteEstimate(BaseModel):
    """Distance, duration and drawable path between two points."""

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(ge=0)
    duration_seconds: float = Field(ge=0)
    path: tuple[Coordinate, ...]
    origin_place_id: str | None = None
    destination_place_id: str | None = None
    curated: bool = False

    @property
    def distance_text(self) -> str:
        return format_distance(self.distance_meters)

    @property
    def duration_text(self) -> str:
        return format_duration(self.duration_seconds)


class CuratedRoute(BaseModel):
    """Hand-tuned road distance and drive time for a known corridor."""

    model_config = ConfigDict(frozen=True)

    distance_meters: float = Field(gt=0)
    duration_seconds: float = Field(gt=0)


def _both_directions(
    corridors: dict[tuple[str, str], CuratedRoute],
) -> dict[tuple[str, str], CuratedRoute]:
    table = dict(corridors)
    for (origin_id, destination_id), route in corridors.items():
        table.setdefault((destination_id, origin_id), route)
    return table


CURATED_ROUTES: dict[tuple[str, str], CuratedRoute] = _both_directions(
    {
        # Downtown Los Angeles <-> Santa Monica Pier via I-10
        ("demo-place-id-1", "demo-place-id-2"): CuratedRoute(
            distance_meters=25_700, duration_seconds=2_100
        ),
        # Downtown Los Angeles <-> Dodger Stadium
        ("demo-place-id-1", "demo-place-id-8"): CuratedRoute(
            distance_meters=3_200, duration_seconds=540
        ),
        # Downtown Los Angeles <-> Hollywood Sign
        ("demo-place-id-1", "demo-place-id-3"): CuratedRoute(
            distance_meters=14_500, duration_seconds=1_800
        ),
        # Downtown Los Angeles <-> Universal Studios via US-101
        ("demo-place-id-1", "demo-place-id-4"): CuratedRoute(
            distance_meters=16_900, duration_seconds=1_500
        ),
        # Santa Monica Pier <-> Venice Beach
        ("demo-place-id-2", "demo-place-id-6"): CuratedRoute(
            distance_meters=4_000, duration_seconds=720
        ),
        # Santa Monica Pier <-> The Getty Center via I-405
        ("demo-place-id-2", "demo-place-id-7"): CuratedRoute(
            distance_meters=13_800, duration_seconds=1_440
        ),
        # Hollywood Sign <-> Griffith Observatory
        ("demo-place-id-3", "demo-place-id-5"): CuratedRoute(
            distance_meters=6_400, duration_seconds=1_080
        ),
        # Hollywood Sign <-> Universal Studios
        ("demo-place-id-3", "demo-place-id-4"): CuratedRoute(
            distance_meters=8_000, duration_seconds=1_200
        ),
    }
)


class RouteEstimator:
    """Builds RouteEstimates from a place catalog and curated corridors.

    Never raises for well-formed coordinates: when no curated corridor
    applies it falls back to a straight-line estimate.
    """

    def __init__(
        self,
        catalog: PlaceCatalog,
        settings: RouteSettings | None = None,
        curated_routes: dict[tuple[str, str], CuratedRoute] | None = None,
        rng: random.Random | None = None,
    ):
        self.catalog = catalog
        self.settings = settings or RouteSettings()
        self.curated_routes = CURATED_ROUTES if curated_routes is None else curated_routes
        self._rng = rng or random.Random()

    def estimate(
        self,
        origin: Coordinate,
        destination: Coordinate,
        path_points: int | None = None,
    ) -> RouteEstimate:
        """Estimate distance, duration and path from origin to destination.

        Args:
            origin: Trip start
            destination: Trip end
            path_points: Overrides the configured number of path points (>= 2)

        Returns:
            RouteEstimate whose path starts at the origin (or its curated place)
            and ends at the destination (or its curated place)
        """
        num_points = max(2, path_points or self.settings.path_points)

        origin_place = self.catalog.nearest(origin)
        destination_place = self.catalog.nearest(destination)

        curated = self._curated_route(origin, origin_place, destination, destination_place)
        if curated is not None:
            logger.debug(
                f"Curated corridor {origin_place.id} -> {destination_place.id}: "
                f"{curated.distance_meters:.0f} m"
            )
            return RouteEstimate(
                distance_meters=curated.distance_meters,
                duration_seconds=curated.duration_seconds,
                path=tuple(
                    self._build_path(
                        origin_place.coordinate, destination_place.coordinate, num_points
                    )
                ),
                origin_place_id=origin_place.id,
                destination_place_id=destination_place.id,
                curated=True,
            )

        distance_meters = distance(origin, destination)
        duration_seconds = distance_meters / self.settings.average_speed_mps
        logger.debug(
            f"Synthetic estimate {origin_place.id} -> {destination_place.id}: "
            f"{distance_meters:.0f} m, {duration_seconds:.0f} s"
        )

        return RouteEstimate(
            distance_meters=distance_meters,
            duration_seconds=duration_seconds,
            path=tuple(self._build_path(origin, destination, num_points)),
            origin_place_id=origin_place.id,
            destination_place_id=destination_place.id,
            curated=False,
        )

    def _curated_route(
        self,
        origin: Coordinate,
        origin_place: PlaceRecord,
        destination: Coordinate,
        destination_place: PlaceRecord,
    ) -> CuratedRoute | None:
        route = self.curated_routes.get((origin_place.id, destination_place.id))
        if route is None:
            return None

        radius = self.settings.curated_snap_radius_m
        for point, place in ((origin, origin_place), (destination, destination_place)):
            if not is_within_proximity(
                point.lat, point.lng, place.coordinate.lat, place.coordinate.lng, radius
            ):
                return None
        return route

    def _build_path(
        self, start: Coordinate, end: Coordinate, num_points: int
    ) -> list[Coordinate]:
        """Evenly spaced points from start to end with jitter on interior points.

        Jitter is applied perpendicular to the straight line in a locally
        scaled lat/lng plane and is capped at jitter_segment_fraction of the
        segment length (and at jitter_max_degrees), which keeps the total path
        length within about half a percent of the straight line.
        """
        num_segments = num_points - 1

        lng_scale = max(math.cos(math.radians((start.lat + end.lat) / 2)), 1e-6)
        d_lat = end.lat - start.lat
        d_lng = (end.lng - start.lng) * lng_scale
        line_length = math.hypot(d_lat, d_lng)

        amplitude = min(
            self.settings.jitter_max_degrees,
            self.settings.jitter_segment_fraction * line_length / num_segments,
        )
        if line_length > 0:
            normal_lat, normal_lng = -d_lng / line_length, d_lat / line_length / lng_scale
        else:
            normal_lat, normal_lng = 0.0, 0.0

        path = [start]
        for i in range(1, num_segments):
            point = interpolate(start, end, i / num_segments)
            if amplitude > 0:
                offset = self._rng.uniform(-amplitude, amplitude)
                point = Coordinate(
                    lat=min(90.0, max(-90.0, point.lat + offset * normal_lat)),
                    lng=min(180.0, max(-180.0, point.lng + offset * normal_lng)),
                )
            path.append(point)
        path.append(end)

        return path
