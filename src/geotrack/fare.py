from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from geotrack.core.exceptions import InvalidArgumentError
from geotrack.settings import FareSettings


class FareTier(str, Enum):
    """Service classes, cheapest first."""

    ECONOMY = "economy"
    COMFORT = "comfort"
    PREMIUM = "premium"


class TierRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fare: float = Field(ge=0)
    per_km_rate: float = Field(ge=0)
    minimum_fare: float = Field(ge=0)


DEFAULT_RATES: dict[FareTier, TierRates] = {
    FareTier.ECONOMY: TierRates(base_fare=5.00, per_km_rate=2.20, minimum_fare=7.00),
    FareTier.COMFORT: TierRates(base_fare=5.00, per_km_rate=3.50, minimum_fare=9.00),
    FareTier.PREMIUM: TierRates(base_fare=5.00, per_km_rate=5.00, minimum_fare=12.00),
}


class FareQuote(BaseModel):
    """Priced fare for a single tier."""

    model_config = ConfigDict(frozen=True)

    amount: float = Field(ge=0)
    tier: FareTier
    surge_applied: bool
    surge_multiplier: float = Field(default=1.0, ge=1.0)
    minimum_applied: bool = False


def round_half_up(value: float) -> float:
    """Round to 2 decimal places, halves away from zero (2.675 -> 2.68)."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class FareCalculator:
    """Prices trips from distance, tier and time of day.

    Pure: the same distance, tier and time always produce the same quote.
    """

    def __init__(
        self,
        settings: FareSettings | None = None,
        rates: dict[FareTier, TierRates] | None = None,
    ):
        self.settings = settings or FareSettings()
        self.rates = DEFAULT_RATES if rates is None else rates

    def is_peak_hour(self, at_time: datetime) -> bool:
        """True if the local hour of ``at_time`` falls in a peak window (inclusive)."""
        hour = at_time.hour
        return any(start <= hour <= end for start, end in self.settings.peak_windows)

    def quote(
        self,
        distance_meters: float,
        tier: FareTier | str,
        at_time: datetime | None = None,
    ) -> FareQuote:
        """
        Price a trip of ``distance_meters`` in ``tier``.

        The peak surge applies before the minimum fare floor, so a surged short
        trip can still land on the floor.
        """
        if distance_meters < 0:
            raise InvalidArgumentError(
                "Distance must be non-negative",
                details={"distance_meters": distance_meters},
            )

        fare_tier = self._resolve_tier(tier)
        rates = self.rates[fare_tier]
        at_time = at_time or datetime.now()

        raw_fare = rates.base_fare + (distance_meters / 1000) * rates.per_km_rate

        surge_applied = self.is_peak_hour(at_time)
        surge_multiplier = self.settings.surge_multiplier if surge_applied else 1.0
        raw_fare *= surge_multiplier

        minimum_applied = raw_fare < rates.minimum_fare
        final_fare = round_half_up(max(raw_fare, rates.minimum_fare))

        return FareQuote(
            amount=final_fare,
            tier=fare_tier,
            surge_applied=surge_applied,
            surge_multiplier=surge_multiplier,
            minimum_applied=minimum_applied,
        )

    def quote_all(
        self, distance_meters: float, at_time: datetime | None = None
    ) -> list[FareQuote]:
        """One quote per configured tier, in tier order."""
        at_time = at_time or datetime.now()
        return [self.quote(distance_meters, tier, at_time) for tier in self.rates]

    def _resolve_tier(self, tier: FareTier | str) -> FareTier:
        try:
            fare_tier = FareTier(tier.lower() if isinstance(tier, str) else tier)
        except ValueError as e:
            raise InvalidArgumentError(f"Unknown fare tier: {tier}", details={"tier": tier}) from e

        if fare_tier not in self.rates:
            raise InvalidArgumentError(
                f"No rates configured for tier: {fare_tier.value}",
                details={"tier": fare_tier.value},
            )
        return fare_tier
