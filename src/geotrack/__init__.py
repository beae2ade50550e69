"""Offline geospatial estimation and simulated live-tracking engine."""

from .engine import EstimationEngine, TripEstimate
from .fare import FareCalculator, FareQuote, FareTier
from .geo import Coordinate, PlaceCatalog, PlaceRecord, RouteEstimate, RouteEstimator
from .tracking import PositionUpdate, TrackingConfig, TrackingSimulator, TrackingState

__all__ = [
    "EstimationEngine",
    "TripEstimate",
    "FareCalculator",
    "FareQuote",
    "FareTier",
    "Coordinate",
    "PlaceCatalog",
    "PlaceRecord",
    "RouteEstimate",
    "RouteEstimator",
    "TrackingSimulator",
    "TrackingConfig",
    "TrackingState",
    "PositionUpdate",
]
