"""Fixed catalog of known places used in place of a live geocoding provider."""

import logging
from collections.abc import Iterable
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from geotrack.core.exceptions import ConfigurationError, NotFoundError
from geotrack.geo.coordinates import Coordinate
from geotrack.geo.distance import distance

logger = logging.getLogger(__name__)


class PlaceRecord(BaseModel):
    """A named location with its address text."""

    model_config = ConfigDict(frozen=True)

    id: str
    address: str
    coordinate: Coordinate

    @property
    def main_text(self) -> str:
        """Leading part of the address, e.g. the landmark name."""
        return self.address.split(",")[0].strip()

    @property
    def secondary_text(self) -> str:
        """Remainder of the address after the first comma."""
        return ",".join(self.address.split(",")[1:]).strip()


DEFAULT_PLACES: tuple[PlaceRecord, ...] = (
    PlaceRecord(
        id="demo-place-id-1",
        address="Downtown Los Angeles, CA, USA",
        coordinate=Coordinate(lat=34.0522, lng=-118.2437),
    ),
    PlaceRecord(
        id="demo-place-id-2",
        address="Santa Monica Pier, Santa Monica, CA, USA",
        coordinate=Coordinate(lat=34.0085, lng=-118.4985),
    ),
    PlaceRecord(
        id="demo-place-id-3",
        address="Hollywood Sign, Los Angeles, CA, USA",
        coordinate=Coordinate(lat=34.1341, lng=-118.3215),
    ),
    PlaceRecord(
        id="demo-place-id-4",
        address="Universal Studios Hollywood, Universal City, CA, USA",
        coordinate=Coordinate(lat=34.1381, lng=-118.3534),
    ),
    PlaceRecord(
        id="demo-place-id-5",
        address="Griffith Observatory, Los Angeles, CA, USA",
        coordinate=Coordinate(lat=34.1184, lng=-118.3004),
    ),
    PlaceRecord(
        id="demo-place-id-6",
        address="Venice Beach, Los Angeles, CA, USA",
        coordinate=Coordinate(lat=33.9850, lng=-118.4695),
    ),
    PlaceRecord(
        id="demo-place-id-7",
        address="The Getty Center, Los Angeles, CA, USA",
        coordinate=Coordinate(lat=34.0775, lng=-118.4746),
    ),
    PlaceRecord(
        id="demo-place-id-8",
        address="Dodger Stadium, Los Angeles, CA, USA",
        coordinate=Coordinate(lat=34.0739, lng=-118.2400),
    ),
)


class PlaceCatalog:
    """Read-only, deterministic substitute for a geocoding provider.

    The catalog is built once and never mutated, so a single instance can be
    shared by every caller without synchronization.
    """

    def __init__(self, places: Iterable[PlaceRecord]):
        self._places: dict[str, PlaceRecord] = {}
        for place in places:
            if place.id in self._places:
                raise ConfigurationError(
                    f"Duplicate place id in catalog: {place.id}",
                    details={"place_id": place.id},
                )
            self._places[place.id] = place

        if not self._places:
            raise ConfigurationError("Place catalog must contain at least one place")

        logger.debug(f"Loaded place catalog with {len(self._places)} places")

    def __len__(self) -> int:
        return len(self._places)

    def __contains__(self, place_id: object) -> bool:
        return place_id in self._places

    @property
    def places(self) -> list[PlaceRecord]:
        return list(self._places.values())

    @property
    def default(self) -> PlaceRecord:
        """First catalog entry, for callers that recover from NotFoundError."""
        return next(iter(self._places.values()))

    def find_by_text(self, query: str) -> list[PlaceRecord]:
        """Case-insensitive substring match against each address.

        Results keep catalog order. An empty query matches every place.
        """
        needle = query.lower()
        return [place for place in self._places.values() if needle in place.address.lower()]

    def find_by_id(self, place_id: str) -> PlaceRecord:
        place = self._places.get(place_id)
        if place is None:
            raise NotFoundError(
                f"Unknown place id: {place_id}", details={"place_id": place_id}
            )
        return place

    def nearest(self, point: Coordinate) -> PlaceRecord:
        """Catalog entry closest to ``point``; ties go to the earlier entry."""
        nearest_place = self.default
        min_distance = float("inf")

        for place in self._places.values():
            d = distance(point, place.coordinate)
            # Strict comparison keeps the first of equally distant places
            if d < min_distance:
                min_distance = d
                nearest_place = place

        return nearest_place


@lru_cache(maxsize=1)
def default_catalog() -> PlaceCatalog:
    """Process-wide catalog built from DEFAULT_PLACES."""
    return PlaceCatalog(DEFAULT_PLACES)
