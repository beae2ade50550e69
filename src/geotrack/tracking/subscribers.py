"""Subscriber registry for position update fan-out."""

import itertools
import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_handle_ids = itertools.count(1)


class Subscription(Generic[T]):
    """Handle for one registered callback.

    The same callback registered twice gets two independent handles.
    """

    def __init__(self, callback: Callable[[T], None]):
        self.subscription_id = next(_handle_ids)
        self.callback = callback
        self.active = True

    def __repr__(self) -> str:
        return f"Subscription(id={self.subscription_id}, active={self.active})"


class SubscriberRegistry(Generic[T]):
    """Ordered set of callbacks with explicit add/remove.

    Deliveries iterate over a snapshot taken when the delivery starts, and a
    handle removed mid-delivery is skipped, so callbacks may unsubscribe
    themselves (or each other) from inside a callback.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[int, Subscription[T]] = {}

    def __len__(self) -> int:
        return len(self._subscriptions)

    def add(self, callback: Callable[[T], None]) -> Subscription[T]:
        subscription = Subscription(callback)
        self._subscriptions[subscription.subscription_id] = subscription
        return subscription

    def remove(self, subscription: Subscription[T]) -> None:
        """Remove a subscription. Removing twice is a no-op."""
        subscription.active = False
        self._subscriptions.pop(subscription.subscription_id, None)

    def clear(self) -> None:
        for subscription in self._subscriptions.values():
            subscription.active = False
        self._subscriptions.clear()

    def snapshot(self) -> list[Subscription[T]]:
        return list(self._subscriptions.values())

    def publish(self, message: T) -> int:
        """Deliver ``message`` to every active subscriber in registration order.

        A callback that raises is logged and skipped; the remaining
        subscribers still receive the message.

        Returns:
            Number of callbacks that were invoked
        """
        delivered = 0
        for subscription in self.snapshot():
            if not subscription.active:
                continue
            try:
                subscription.callback(message)
            except Exception:
                logger.exception(
                    f"Subscriber {subscription.subscription_id} raised while handling update"
                )
            delivered += 1
        return delivered
