from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="GEOTRACK_")


class RouteSettings(BaseSettings):
    """Synthetic route estimation tuning."""

    average_speed_mps: float = Field(
        default=40 * 1000 / 3600,
        gt=0.0,
        le=50.0,
        description="Typical urban driving speed used to derive durations (40 km/h)",
    )
    path_points: int = Field(
        default=50,
        ge=2,
        le=500,
        description="Number of points in a generated route path, endpoints included",
    )
    jitter_max_degrees: float = Field(
        default=0.0005,
        ge=0.0,
        le=0.01,
        description="Absolute cap on lateral jitter applied to interior path points",
    )
    jitter_segment_fraction: float = Field(
        default=0.05,
        ge=0.0,
        le=0.25,
        description="Jitter cap as a fraction of the local segment length",
    )
    curated_snap_radius_m: float = Field(
        default=1500.0,
        ge=0.0,
        description="Max distance between an endpoint and its place for curated corridors",
    )

    model_config = SettingsConfigDict(env_prefix="ROUTE_")


class FareSettings(BaseSettings):
    surge_multiplier: float = Field(default=1.2, ge=1.0, le=5.0)
    morning_peak_start_hour: int = Field(default=7, ge=0, le=23)
    morning_peak_end_hour: int = Field(default=9, ge=0, le=23)
    evening_peak_start_hour: int = Field(default=17, ge=0, le=23)
    evening_peak_end_hour: int = Field(default=19, ge=0, le=23)

    model_config = SettingsConfigDict(env_prefix="FARE_")

    @model_validator(mode="after")
    def validate_peak_windows(self) -> "FareSettings":
        if self.morning_peak_start_hour > self.morning_peak_end_hour:
            raise ValueError("Morning peak window must start before it ends")
        if self.evening_peak_start_hour > self.evening_peak_end_hour:
            raise ValueError("Evening peak window must start before it ends")
        return self

    @property
    def peak_windows(self) -> tuple[tuple[int, int], ...]:
        """Inclusive (start_hour, end_hour) peak windows."""
        return (
            (self.morning_peak_start_hour, self.morning_peak_end_hour),
            (self.evening_peak_start_hour, self.evening_peak_end_hour),
        )


class TrackingSettings(BaseSettings):
    update_interval_ms: int = Field(default=1000, gt=0, le=60_000)
    speed_factor: float = Field(default=5.0, gt=0.0, le=1000.0)

    model_config = SettingsConfigDict(env_prefix="TRACKING_")


class Settings(BaseSettings):
    engine: EngineSettings = Field(default_factory=EngineSettings)
    route: RouteSettings = Field(default_factory=RouteSettings)
    fare: FareSettings = Field(default_factory=FareSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
