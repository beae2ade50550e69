from .coordinates import Coordinate
from .distance import distance, haversine_distance_km, haversine_distance_m, is_within_proximity
from .geometry import bearing, interpolate, precompute_headings
from .places import DEFAULT_PLACES, PlaceCatalog, PlaceRecord, default_catalog
from .route_estimator import CuratedRoute, RouteEstimate, RouteEstimator

__all__ = [
    "Coordinate",
    "distance",
    "haversine_distance_m",
    "haversine_distance_km",
    "is_within_proximity",
    "bearing",
    "interpolate",
    "precompute_headings",
    "PlaceRecord",
    "PlaceCatalog",
    "DEFAULT_PLACES",
    "default_catalog",
    "CuratedRoute",
    "RouteEstimate",
    "RouteEstimator",
]
