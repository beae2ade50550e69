"""Core utilities for the estimation and tracking engine."""

from .exceptions import (
    ConfigurationError,
    GeoTrackError,
    InvalidArgumentError,
    InvalidRouteError,
    NotFoundError,
    PermanentError,
)

__all__ = [
    "GeoTrackError",
    "PermanentError",
    "InvalidArgumentError",
    "NotFoundError",
    "InvalidRouteError",
    "ConfigurationError",
]
