"""Geographic coordinate value type."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """Latitude/longitude pair in decimal degrees.

    Immutable and compared by value. Out-of-range values are rejected at
    construction, so GeoMath functions can assume well-formed input.
    """

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    @classmethod
    def from_tuple(cls, coords: tuple[float, float]) -> "Coordinate":
        """Build from a (lat, lng) tuple."""
        return cls(lat=coords[0], lng=coords[1])

    def as_tuple(self) -> tuple[float, float]:
        return self.lat, self.lng
