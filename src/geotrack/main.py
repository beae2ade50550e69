"""
GeoTrack demo entry point

Resolves two places from the built-in catalog, prints the route estimate and
the fare for every tier, and optionally plays the simulated tracking feed.

Usage:
    python -m geotrack.main --origin "Santa Monica" --destination "Dodger"
    python -m geotrack.main --origin 34.05,-118.25 --destination Venice --track

Options:
    --tier: Tier highlighted in the output (default: economy)
    --track: Play the tracking feed after the estimate
    --realtime: Pace the feed against the wall clock
    --seed: Seed for the route jitter
"""

import argparse
import random
import sys

import simpy
import simpy.rt

from geotrack.core.exceptions import GeoTrackError
from geotrack.engine import EstimationEngine
from geotrack.fare import FareTier
from geotrack.geo.coordinates import Coordinate
from geotrack.geo.route_estimator import RouteEstimate
from geotrack.settings import get_settings
from geotrack.sim_logging import get_logger, log_session_context, setup_logging
from geotrack.tracking.simulator import PositionUpdate

logger = get_logger(__name__)


def resolve_location(engine: EstimationEngine, value: str) -> Coordinate:
    """Accept either 'lat,lng' or free text matched against the catalog."""
    parts = value.split(",")
    if len(parts) == 2:
        try:
            return Coordinate(lat=float(parts[0]), lng=float(parts[1]))
        except ValueError:
            pass

    matches = engine.search_places(value)
    if not matches:
        raise GeoTrackError(f"No known place matches '{value}'", details={"query": value})
    return matches[0].coordinate


def play_tracking(engine: EstimationEngine, route: RouteEstimate, realtime: bool) -> None:
    env = simpy.rt.RealtimeEnvironment(strict=False) if realtime else simpy.Environment()
    simulator = engine.start_tracking(route, env)

    def on_update(update: PositionUpdate) -> None:
        print(
            f"  #{update.index:3d}  ({update.coordinate.lat:.5f}, {update.coordinate.lng:.5f})"
            f"  heading {update.heading:6.1f}  speed {update.speed:7.1f} m/s"
        )

    simulator.subscribe(on_update)
    with log_session_context(simulator.session_id):
        env.run()
    simulator.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Estimate and simulate a trip offline")
    parser.add_argument("--origin", required=True, help="Place text or 'lat,lng'")
    parser.add_argument("--destination", required=True, help="Place text or 'lat,lng'")
    parser.add_argument(
        "--tier",
        choices=[tier.value for tier in FareTier],
        default=FareTier.ECONOMY.value,
    )
    parser.add_argument("--track", action="store_true", help="Play the tracking feed")
    parser.add_argument("--realtime", action="store_true", help="Pace playback in real time")
    parser.add_argument("--seed", type=int, default=None, help="Route jitter seed")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(
        level=settings.engine.log_level,
        json_output=settings.engine.log_format == "json",
        environment=settings.engine.environment,
    )

    engine = EstimationEngine(settings=settings, rng=random.Random(args.seed))

    try:
        origin = resolve_location(engine, args.origin)
        destination = resolve_location(engine, args.destination)
    except GeoTrackError as e:
        logger.error(e.message)
        return 1

    options = engine.ride_options(origin, destination)
    route = options[0].route
    origin_place = engine.place(route.origin_place_id)
    destination_place = engine.place(route.destination_place_id)

    print(f"From: {origin_place.address}")
    print(f"To:   {destination_place.address}")
    source = "curated corridor" if route.curated else "straight-line estimate"
    print(f"Route: {route.distance_text}, {route.duration_text} ({source})")
    for option in options:
        marker = "*" if option.quote.tier.value == args.tier else " "
        surge = " (peak surge)" if option.quote.surge_applied else ""
        print(f" {marker} {option.quote.tier.value:8s} {option.quote.amount:8.2f}{surge}")

    if args.track:
        print("Tracking:")
        play_tracking(engine, route, args.realtime)

    return 0


if __name__ == "__main__":
    sys.exit(main())
