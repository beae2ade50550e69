from .simulator import PositionUpdate, TrackingConfig, TrackingSimulator, TrackingState
from .subscribers import SubscriberRegistry, Subscription

__all__ = [
    "TrackingSimulator",
    "TrackingConfig",
    "TrackingState",
    "PositionUpdate",
    "SubscriberRegistry",
    "Subscription",
]
