"""Window events and subscriptions.

Hosts publish window events on an EventBus; listeners subscribe and get back
a Subscription handle which they dispose of when they no longer want events.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class WindowEvent(Enum):
    """Kinds of window events."""
    RESIZE = "resize"
    FONT_METRICS_CHANGED = "font_metrics_changed"


class Subscription:
    """Handle returned by EventBus.subscribe."""

    def __init__(self, bus: 'EventBus', event: WindowEvent, callback: Callable[..., Any]):
        self._bus = bus
        self.event = event
        self.callback = callback
        self.active = True

    def dispose(self) -> None:
        """Stop receiving events. Safe to call more than once."""
        if not self.active:
            return
        self.active = False
        self._bus._remove(self)


class EventBus:
    """Synchronous publish/subscribe for window events."""

    def __init__(self):
        self._subscriptions: Dict[WindowEvent, List[Subscription]] = {event: [] for event in WindowEvent}

    def subscribe(self, event: WindowEvent, callback: Callable[..., Any]) -> Subscription:
        subscription = Subscription(self, event, callback)
        self._subscriptions[event].append(subscription)
        logger.debug("subscribed %r to %s", callback, event.value)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions[subscription.event].remove(subscription)
        except ValueError:
            pass
        logger.debug("unsubscribed %r from %s", subscription.callback, subscription.event.value)

    def publish(self, event: WindowEvent, *args: Any) -> int:
        """Call every subscriber of `event` in subscription order.

        A failing subscriber is logged and does not prevent delivery to the
        others.

        Returns:
            Number of subscribers called successfully.
        """
        delivered = 0
        # iterate on a copy so callbacks may dispose their own subscription
        for subscription in list(self._subscriptions[event]):
            if not subscription.active:
                continue
            try:
                subscription.callback(*args)
                delivered += 1
            except Exception:
                logger.exception("Error in %s handler %r", event.value, subscription.callback)
        return delivered

    def subscriber_count(self, event: WindowEvent) -> int:
        return len(self._subscriptions[event])
