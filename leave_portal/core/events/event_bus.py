"""
Event bus implementation for table change notifications.
"""
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

from .base_event import ChangeEvent, ChangeType

logger = logging.getLogger(__name__)

Handler = Callable[[ChangeEvent], None]
Key = Tuple[str, ChangeType]


class Subscription:
    """
    Handle for a registered handler.

    A subscription is a long-lived resource: release it with
    `unsubscribe()` (or by leaving its `with` block) when the consumer
    goes away.
    """

    def __init__(self, bus: "EventBus", key: Key, handler: Handler):
        self._bus = bus
        self.key = key
        self.handler = handler
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._bus._remove(self)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unsubscribe()


class EventBus:
    """
    Synchronous publish/subscribe bus keyed by (table, change type).

    Handlers run in the publishing thread. A failing handler is logged and
    does not stop delivery to the others or fail the publisher.
    """

    def __init__(self):
        self._handlers: Dict[Key, List[Subscription]] = {}
        self._lock = threading.Lock()

    def subscribe(self, table: str, change: ChangeType, handler: Handler) -> Subscription:
        """
        Subscribe a handler to changes of one kind on one table.

        Returns:
            Subscription that must be released by the caller
        """
        key = (table, ChangeType(change))
        subscription = Subscription(self, key, handler)
        with self._lock:
            self._handlers.setdefault(key, []).append(subscription)
        logger.info(f"Registered handler for event type: {table}:{key[1].value}")
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            handlers = self._handlers.get(subscription.key, [])
            if subscription in handlers:
                handlers.remove(subscription)
            if not handlers:
                self._handlers.pop(subscription.key, None)
        logger.info(f"Unregistered handler for event type: {subscription.key[0]}:{subscription.key[1].value}")

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            return sum(
                len(subs) for key, subs in self._handlers.items()
                if table is None or key[0] == table
            )

    def publish(self, event: ChangeEvent) -> int:
        """
        Deliver an event to every handler subscribed to its key.

        Returns:
            Number of handlers that processed the event without error
        """
        with self._lock:
            subscriptions = list(self._handlers.get((event.table, event.change), []))

        if not subscriptions:
            logger.debug(f"No handlers found for event type: {event.event_type}")
            return 0

        delivered = 0
        for subscription in subscriptions:
            try:
                subscription.handler(event)
                delivered += 1
            except Exception as e:
                logger.error(f"Error in handler for {event.event_type}: {e}", exc_info=True)
        return delivered

    def clear(self) -> None:
        with self._lock:
            for subscriptions in self._handlers.values():
                for subscription in subscriptions:
                    subscription.active = False
            self._handlers.clear()


# Process-wide bus shared by services and listeners
event_bus = EventBus()
