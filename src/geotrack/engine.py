"""Estimation engine facade wiring catalog, routing, pricing and tracking.

Follows the booking flow: resolve places, estimate the route, price it per
tier, then start a tracking session when the trip begins. Callers that have
a live mapping provider may substitute its results; this engine is the
degraded-mode path and never performs network or disk I/O.
"""

import logging
import random
from datetime import datetime

import simpy
from pydantic import BaseModel, ConfigDict

from geotrack.fare import FareCalculator, FareQuote, FareTier
from geotrack.geo.coordinates import Coordinate
from geotrack.geo.places import PlaceCatalog, PlaceRecord, default_catalog
from geotrack.geo.route_estimator import RouteEstimate, RouteEstimator
from geotrack.settings import Settings, get_settings
from geotrack.tracking.simulator import TrackingConfig, TrackingSimulator

logger = logging.getLogger(__name__)


class TripEstimate(BaseModel):
    """Route and fare shown before booking."""

    model_config = ConfigDict(frozen=True)

    route: RouteEstimate
    quote: FareQuote


class EstimationEngine:
    def __init__(
        self,
        settings: Settings | None = None,
        catalog: PlaceCatalog | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog or default_catalog()
        self.route_estimator = RouteEstimator(self.catalog, self.settings.route, rng=rng)
        self.fare_calculator = FareCalculator(self.settings.fare)

    def search_places(self, query: str) -> list[PlaceRecord]:
        return self.catalog.find_by_text(query)

    def place(self, place_id: str) -> PlaceRecord:
        return self.catalog.find_by_id(place_id)

    def reverse_geocode(self, point: Coordinate) -> PlaceRecord:
        return self.catalog.nearest(point)

    def estimate_route(self, origin: Coordinate, destination: Coordinate) -> RouteEstimate:
        return self.route_estimator.estimate(origin, destination)

    def quote_fare(
        self,
        distance_meters: float,
        tier: FareTier | str = FareTier.ECONOMY,
        at_time: datetime | None = None,
    ) -> FareQuote:
        return self.fare_calculator.quote(distance_meters, tier, at_time)

    def estimate_trip(
        self,
        origin: Coordinate,
        destination: Coordinate,
        tier: FareTier | str = FareTier.ECONOMY,
        at_time: datetime | None = None,
    ) -> TripEstimate:
        route = self.estimate_route(origin, destination)
        quote = self.quote_fare(route.distance_meters, tier, at_time)
        logger.info(
            f"Trip estimate {route.origin_place_id} -> {route.destination_place_id}: "
            f"{route.distance_text}, {route.duration_text}, "
            f"{quote.tier.value} {quote.amount:.2f}",
            extra={"tier": quote.tier.value},
        )
        return TripEstimate(route=route, quote=quote)

    def ride_options(
        self,
        origin: Coordinate,
        destination: Coordinate,
        at_time: datetime | None = None,
    ) -> list[TripEstimate]:
        """One estimate per tier sharing a single route."""
        route = self.estimate_route(origin, destination)
        quotes = self.fare_calculator.quote_all(route.distance_meters, at_time)
        return [TripEstimate(route=route, quote=quote) for quote in quotes]

    def start_tracking(
        self,
        route: RouteEstimate,
        env: simpy.Environment,
        config: TrackingConfig | None = None,
    ) -> TrackingSimulator:
        """Create and start a tracking session on ``env``.

        The caller owns the session and must reset or close it when the trip
        ends. Subscribers registered after this call receive only the updates
        emitted from then on.
        """
        simulator = TrackingSimulator.create(
            route,
            config=config or TrackingConfig.from_settings(self.settings.tracking),
            env=env,
        )
        simulator.start()
        return simulator
