"""Standardized exception hierarchy for the estimation and tracking engine."""

from typing import Any


class GeoTrackError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PermanentError(GeoTrackError):
    """Errors that will not succeed on retry.

    Every error raised by the engine is a programming or configuration error;
    none of them are retried internally.
    """

    pass


class InvalidArgumentError(PermanentError):
    """Argument outside its documented domain (e.g. negative distance)."""

    pass


class NotFoundError(PermanentError):
    """Requested entity does not exist."""

    pass


class InvalidRouteError(PermanentError):
    """Route cannot be simulated (fewer than two path points)."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass
