"""
New leave request notifications for administrators.

Two views of the same thing: a pull feed of requests created after the
client's "last viewed" timestamp, and an in-process listener counting
requests as they are inserted.

The HTTP API serves only the pull feed. `LeaveNotificationListener` is for
callers embedding the services in a long-running process (a worker, a
websocket handler); they own its lifetime and must `close()` it.
"""

import threading
from collections import deque
from datetime import datetime
from typing import Deque, List, Optional

from sqlalchemy.orm import Session

from leave_portal.config.logging import get_logger
from leave_portal.core.constants import NOTIFICATION_RECENT_LIMIT
from leave_portal.core.events import ChangeEvent, ChangeType, EventBus, event_bus
from leave_portal.core.exceptions import RepositoryError
from leave_portal.repositories.leave.leave_repository import LeaveRepository
from leave_portal.schemas.leave.leave import LeaveResponse, NotificationFeed
from leave_portal.services.base import BaseService, ServiceResult
from leave_portal.services.leave.availability import resolve_employee_name
from leave_portal.services.leave.leave_service import LEAVES_TABLE
from leave_portal.utils.date_utils import to_utc

logger = get_logger(__name__)


class LeaveNotificationService(BaseService[LeaveRepository]):
    """Pull feed of recently submitted leave requests."""

    def __init__(self, db: Session):
        super().__init__(LeaveRepository(db), db)

    def new_requests(self, since: Optional[datetime] = None) -> ServiceResult[NotificationFeed]:
        """
        Requests created strictly after `since`, newest first.

        A naive `since` is taken as UTC. Without `since` every request is
        returned.
        """
        since_utc = to_utc(since) if since is not None else None
        try:
            leaves = self.repository.find_created_since(since_utc)
        except RepositoryError as e:
            return self._handle_exception(e, "load new leave requests", since_utc)

        items = [
            LeaveResponse.from_model(leave, resolve_employee_name(leave.user))
            for leave in leaves
        ]
        return ServiceResult.success(NotificationFeed(since=since_utc, count=len(items), items=items))


class LeaveNotificationListener:
    """
    Counts leave inserts announced on the change bus.

    Holds a bus subscription until `close()` is called; usable as a
    context manager. Only the newest `recent_limit` events are kept, the
    count keeps growing until `mark_seen()`.
    """

    def __init__(self, bus: Optional[EventBus] = None, recent_limit: int = NOTIFICATION_RECENT_LIMIT):
        self._lock = threading.Lock()
        self._count = 0
        self._recent: Deque[ChangeEvent] = deque(maxlen=recent_limit)
        self._subscription = (bus or event_bus).subscribe(LEAVES_TABLE, ChangeType.INSERT, self._on_insert)

    def _on_insert(self, event: ChangeEvent) -> None:
        with self._lock:
            self._count += 1
            self._recent.appendleft(event)
        logger.debug(f"New leave request {event.record.get('id')}")

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def recent(self) -> List[ChangeEvent]:
        """Received events, newest first."""
        with self._lock:
            return list(self._recent)

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    def mark_seen(self) -> None:
        with self._lock:
            self._count = 0
            self._recent.clear()

    def close(self) -> None:
        self._subscription.unsubscribe()

    def __enter__(self) -> "LeaveNotificationListener":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
