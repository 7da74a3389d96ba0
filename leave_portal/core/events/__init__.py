"""
In-process change notification for store tables.
"""

from leave_portal.core.events.base_event import ChangeEvent, ChangeType
from leave_portal.core.events.event_bus import EventBus, Subscription, event_bus

__all__ = ["ChangeEvent", "ChangeType", "EventBus", "Subscription", "event_bus"]
