import random
from datetime import UTC, datetime

import pytest
import simpy

from geotrack.geo.places import DEFAULT_PLACES, PlaceCatalog
from geotrack.geo.route_estimator import RouteEstimate
from tests.factories import RouteFactory


@pytest.fixture
def catalog() -> PlaceCatalog:
    """Catalog built from the default Los Angeles places."""
    return PlaceCatalog(DEFAULT_PLACES)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random generator for reproducible route jitter."""
    return random.Random(42)


@pytest.fixture
def env() -> simpy.Environment:
    return simpy.Environment()


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp."""
    timestamp = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)
    return lambda: timestamp


@pytest.fixture
def route_factory() -> RouteFactory:
    return RouteFactory()


@pytest.fixture
def five_point_route(route_factory: RouteFactory) -> RouteEstimate:
    """Straight northbound route through downtown with five vertices."""
    return route_factory.northbound(points=5)
