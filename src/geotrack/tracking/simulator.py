"""Simulated live vehicle tracking along a route path.

A TrackingSimulator is one trip's tracking session: an explicit state machine
(idle, running, paused, finished) plus the index of the next path vertex to
emit. Time is driven by a SimPy environment owned by the caller; the session
owns at most one SimPy process (the ticker) and interrupts it on pause or
reset, so two ticks of one session never overlap.

Use ``simpy.rt.RealtimeEnvironment`` for wall-clock playback, or a plain
``simpy.Environment`` to run as fast as possible. ``tick()`` can also be
called directly to single-step a running session.
"""

import logging
from collections.abc import Callable, Generator
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

import simpy
from pydantic import BaseModel, ConfigDict, Field

from geotrack.core.exceptions import InvalidRouteError
from geotrack.geo.coordinates import Coordinate
from geotrack.geo.distance import distance
from geotrack.geo.geometry import precompute_headings
from geotrack.geo.route_estimator import RouteEstimate
from geotrack.settings import TrackingSettings
from geotrack.tracking.subscribers import SubscriberRegistry

logger = logging.getLogger(__name__)


class TrackingState(str, Enum):
    """Tracking session states."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


VALID_STATE_TRANSITIONS: dict[TrackingState, set[TrackingState]] = {
    TrackingState.IDLE: {TrackingState.RUNNING},
    TrackingState.RUNNING: {TrackingState.PAUSED, TrackingState.FINISHED},
    TrackingState.PAUSED: {TrackingState.RUNNING},
    TrackingState.FINISHED: set(),
}


class TrackingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    update_interval_ms: int = Field(default=1000, gt=0)
    speed_factor: float = Field(default=5.0, gt=0.0)

    @classmethod
    def from_settings(cls, settings: TrackingSettings) -> "TrackingConfig":
        return cls(
            update_interval_ms=settings.update_interval_ms,
            speed_factor=settings.speed_factor,
        )

    @property
    def tick_interval_seconds(self) -> float:
        """Seconds between ticks; a higher speed factor plays back faster."""
        return self.update_interval_ms / 1000 / self.speed_factor


class PositionUpdate(BaseModel):
    """One emitted vehicle position."""

    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    heading: float = Field(ge=0.0, lt=360.0)
    speed: float = Field(ge=0.0, description="Meters per second")
    timestamp: datetime
    index: int = Field(ge=0, description="Path vertex this update was emitted for")


PositionCallback = Callable[[PositionUpdate], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TrackingSimulator:
    """Moves a simulated vehicle along a route and notifies subscribers."""

    def __init__(
        self,
        route: RouteEstimate,
        config: TrackingConfig | None = None,
        env: simpy.Environment | None = None,
        clock: Callable[[], datetime] | None = None,
        session_id: str | None = None,
    ):
        if len(route.path) < 2:
            raise InvalidRouteError(
                f"Route path needs at least 2 points, got {len(route.path)}",
                details={"path_length": len(route.path)},
            )

        self.route = route
        self.config = config or TrackingConfig()
        self.env = env or simpy.Environment()
        self.session_id = session_id or str(uuid4())
        self._clock = clock or _utc_now

        self.path: tuple[Coordinate, ...] = tuple(route.path)
        self.headings: tuple[float, ...] = tuple(precompute_headings(self.path))
        self.current_index = 0
        self.last_update: PositionUpdate | None = None

        self._state = TrackingState.IDLE
        self._subscribers: SubscriberRegistry[PositionUpdate] = SubscriberRegistry()
        self._ticker: simpy.Process | None = None

    @classmethod
    def create(
        cls,
        route: RouteEstimate,
        config: TrackingConfig | None = None,
        env: simpy.Environment | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "TrackingSimulator":
        """Build a session for ``route``; raises InvalidRouteError for paths under 2 points."""
        return cls(route, config=config, env=env, clock=clock)

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def is_ticking(self) -> bool:
        """True while a ticker process is scheduled."""
        return self._ticker is not None

    @property
    def progress(self) -> float:
        """Fraction of path vertices already emitted (0.0 to 1.0)."""
        return self.current_index / len(self.path)

    @property
    def remaining_seconds(self) -> float:
        """Playback time left until the last vertex is emitted."""
        return (len(self.path) - self.current_index) * self.config.tick_interval_seconds

    def start(self) -> None:
        """Begin or resume emitting updates. No-op when running or finished."""
        if self._state not in (TrackingState.IDLE, TrackingState.PAUSED):
            return

        self._transition(TrackingState.RUNNING)
        self._ticker = self.env.process(self._run())

    def pause(self) -> None:
        """Stop the ticker, keeping the current index. No-op unless running."""
        if self._state != TrackingState.RUNNING:
            return

        self._stop_ticker()
        self._transition(TrackingState.PAUSED)

    def reset(self) -> None:
        """Stop the ticker and rewind to the first vertex. Safe from any state."""
        self._stop_ticker()
        old_state = self._state
        self._state = TrackingState.IDLE
        self.current_index = 0
        self.last_update = None
        logger.info(
            f"Tracking session {self.session_id}: {old_state.value} -> idle (reset)",
            extra={"session_id": self.session_id},
        )

    def close(self) -> None:
        """Reset and drop every subscriber, for discarding the session."""
        self.reset()
        self._subscribers.clear()

    def subscribe(self, callback: PositionCallback) -> Callable[[], None]:
        """Register ``callback`` for future updates (no replay).

        Returns:
            Function that removes the callback; calling it again is a no-op
        """
        subscription = self._subscribers.add(callback)

        def unsubscribe() -> None:
            self._subscribers.remove(subscription)

        return unsubscribe

    def tick(self) -> PositionUpdate | None:
        """Advance one step.

        Emits the update for the current vertex to every subscriber, or, once
        every vertex has been emitted, transitions to finished. Does nothing
        unless running.

        Returns:
            The emitted update, or None when nothing was emitted
        """
        if self._state != TrackingState.RUNNING:
            return None

        if self.current_index >= len(self.path):
            self._stop_ticker()
            self._transition(TrackingState.FINISHED)
            return None

        index = self.current_index
        update = PositionUpdate(
            coordinate=self.path[index],
            heading=self.headings[index],
            speed=self._segment_speed(index),
            timestamp=self._clock(),
            index=index,
        )

        # Subscribers observe the advanced index
        self.current_index = index + 1
        self.last_update = update
        self._subscribers.publish(update)

        return update

    def _segment_speed(self, index: int) -> float:
        # The last vertex has no next point: the vehicle has arrived
        if index + 1 >= len(self.path):
            return 0.0
        return distance(self.path[index], self.path[index + 1]) / (
            self.config.tick_interval_seconds
        )

    def _run(self) -> Generator[simpy.Event, Any, None]:
        ticker = self.env.active_process
        try:
            while self._ticker is ticker and self._state == TrackingState.RUNNING:
                yield self.env.timeout(self.config.tick_interval_seconds)
                if self._ticker is not ticker:
                    return
                self.tick()
        except simpy.Interrupt:
            return

    def _stop_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is None or not ticker.is_alive:
            return
        # A subscriber may pause or reset from inside the ticker's own tick;
        # a process cannot interrupt itself, and the loop exits on its own.
        if ticker is not self.env.active_process:
            ticker.interrupt("stopped")

    def _transition(self, new_state: TrackingState) -> None:
        if new_state not in VALID_STATE_TRANSITIONS[self._state]:
            raise ValueError(
                f"Invalid transition from {self._state.value} to {new_state.value}"
            )

        old_state = self._state
        self._state = new_state
        logger.info(
            f"Tracking session {self.session_id}: {old_state.value} -> {new_state.value} "
            f"at index {self.current_index}/{len(self.path)}",
            extra={"session_id": self.session_id},
        )
