"""
Leave request service.

Create, edit, delete and review leave requests, list them per employee or
through the admin filter, and compute the dashboard counters and the
employee calendar. Every successful write is announced on the change bus.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from leave_portal.core.constants import DEFAULT_LEAVE_COLOR, LEAVE_COLORS
from leave_portal.core.events import ChangeEvent, ChangeType, EventBus, event_bus
from leave_portal.core.exceptions import RepositoryError
from leave_portal.models.base.enums import LeaveStatus
from leave_portal.models.leave.leave import Leave
from leave_portal.models.user.user import User
from leave_portal.repositories.leave.leave_repository import LeaveRepository
from leave_portal.repositories.user.user_repository import UserRepository
from leave_portal.schemas.common.pagination import PaginatedResponse
from leave_portal.schemas.leave.leave import (
    CalendarMark,
    DashboardStats,
    LeaveCreate,
    LeaveQuery,
    LeaveResponse,
    LeaveUpdate,
)
from leave_portal.services.base import BaseService, ServiceResult
from leave_portal.services.leave.availability import resolve_employee_name
from leave_portal.utils.date_utils import today_local

LEAVES_TABLE = Leave.__tablename__


def leave_color(leave_type) -> str:
    """Calendar colour for a leave type; unknown types are gray."""
    key = getattr(leave_type, "value", leave_type)
    return LEAVE_COLORS.get(key, DEFAULT_LEAVE_COLOR)


class LeaveService(BaseService[LeaveRepository]):
    """
    Leave request operations.

    `actor` arguments, when given, are the signed-in user on whose behalf
    the call is made; employees may only touch their own rows.
    """

    def __init__(self, db: Session, bus: Optional[EventBus] = None):
        super().__init__(LeaveRepository(db), db)
        self.user_repository = UserRepository(db)
        self.bus = bus or event_bus

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _to_response(self, leave: Leave) -> LeaveResponse:
        return LeaveResponse.from_model(leave, resolve_employee_name(leave.user))

    def _publish(self, change: ChangeType, record: dict) -> None:
        self.bus.publish(ChangeEvent(table=LEAVES_TABLE, change=change, record=record))

    def _owned(self, leave_id: str, actor: Optional[User], action: str) -> ServiceResult[Leave]:
        leave = self.repository.find_by_id(leave_id)
        if leave is None:
            return ServiceResult.not_found("Leave", leave_id)
        if actor is not None and not actor.is_admin and leave.user_id != actor.id:
            self._logger.warning(
                f"User {actor.id} tried to {action} leave {leave_id} owned by {leave.user_id}"
            )
            return ServiceResult.forbidden(action, "leave")
        return ServiceResult.success(leave)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, user_id: str, leave: LeaveCreate) -> ServiceResult[Optional[LeaveResponse]]:
        """
        Submit a leave request with status Pending.

        An incomplete form (or a weekend date) is accepted and ignored: the
        result is a success carrying no data.
        """
        if not leave.is_submittable:
            self._logger.debug(f"Ignoring incomplete leave submission from user {user_id}")
            return ServiceResult.success(None, message="Nothing to save")

        try:
            created = self.repository.create_leave(user_id, leave.to_fields())
        except RepositoryError as e:
            return self._handle_exception(e, "create leave", user_id)

        self._publish(ChangeType.INSERT, created.to_dict())
        return ServiceResult.success(self._to_response(created), message="Leave submitted")

    def update(
        self,
        leave_id: str,
        patch: LeaveUpdate,
        actor: Optional[User] = None,
    ) -> ServiceResult[Optional[LeaveResponse]]:
        """
        Rewrite all four form fields of a leave, whatever its status.

        Incomplete forms are ignored like in `create`.
        """
        try:
            owned = self._owned(leave_id, actor, "update")
            if not owned:
                return owned

            if not patch.is_submittable:
                self._logger.debug(f"Ignoring incomplete update of leave {leave_id}")
                return ServiceResult.success(None, message="Nothing to save")

            updated = self.repository.update(leave_id, patch.to_fields())
        except RepositoryError as e:
            return self._handle_exception(e, "update leave", leave_id)

        if updated is None:
            return ServiceResult.not_found("Leave", leave_id)

        self._publish(ChangeType.UPDATE, updated.to_dict())
        return ServiceResult.success(self._to_response(updated), message="Leave updated")

    def delete(self, leave_id: str, actor: Optional[User] = None) -> ServiceResult[bool]:
        try:
            owned = self._owned(leave_id, actor, "delete")
            if not owned:
                return owned
            deleted = self.repository.delete(leave_id)
        except RepositoryError as e:
            return self._handle_exception(e, "delete leave", leave_id)

        if not deleted:
            return ServiceResult.not_found("Leave", leave_id)

        self._publish(ChangeType.DELETE, {"id": leave_id})
        return ServiceResult.success(True, message="Leave deleted")

    def set_status(self, leave_id: str, status: LeaveStatus) -> ServiceResult[LeaveResponse]:
        """
        Approve or reject a leave.

        Applies unconditionally, so repeating a decision or reversing one
        is allowed.
        """
        if status not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            return ServiceResult.validation_failure("Status must be Approved or Rejected", field="status")

        try:
            updated = self.repository.update_status(leave_id, status)
        except RepositoryError as e:
            return self._handle_exception(e, "set leave status", leave_id)

        if updated is None:
            return ServiceResult.not_found("Leave", leave_id)

        self._logger.info(f"Leave {leave_id} marked {status.value}")
        self._publish(ChangeType.UPDATE, updated.to_dict())
        return ServiceResult.success(self._to_response(updated))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, leave_id: str, actor: Optional[User] = None) -> ServiceResult[LeaveResponse]:
        try:
            owned = self._owned(leave_id, actor, "view")
        except RepositoryError as e:
            return self._handle_exception(e, "get leave", leave_id)
        if not owned:
            return owned
        return ServiceResult.success(self._to_response(owned.data))

    def list_by_user(self, user_id: str) -> ServiceResult[List[LeaveResponse]]:
        """One employee's requests, earliest leave date first."""
        try:
            leaves = self.repository.find_by_user(user_id)
        except RepositoryError as e:
            return self._handle_exception(e, "list leaves", user_id)
        return ServiceResult.success([self._to_response(leave) for leave in leaves])

    def list_by_filter(self, query: LeaveQuery) -> ServiceResult[PaginatedResponse[LeaveResponse]]:
        """Admin listing: name search and date bounds, one page at a time."""
        try:
            leaves, total = self.repository.search(
                search_term=query.search,
                date_from=query.date_from,
                date_to=query.date_to,
                offset=query.offset,
                limit=query.page_size,
            )
        except RepositoryError as e:
            return self._handle_exception(e, "filter leaves", additional_context=query.model_dump(mode="json"))

        page = PaginatedResponse[LeaveResponse].create(
            items=[self._to_response(leave) for leave in leaves],
            total_items=total,
            page=query.page,
            page_size=query.page_size,
        )
        return ServiceResult.success(page)

    def dashboard_stats(self, today: Optional[date] = None) -> ServiceResult[DashboardStats]:
        """Account total, leaves dated today and leaves dated after today."""
        today = today or today_local()
        try:
            stats = DashboardStats(
                total_employees=self.user_repository.count(),
                today_leaves=self.repository.count_on(today),
                upcoming_leaves=self.repository.count_after(today),
            )
        except RepositoryError as e:
            return self._handle_exception(e, "load dashboard", today)
        return ServiceResult.success(stats)

    def calendar_marks(self, user_id: str) -> ServiceResult[List[CalendarMark]]:
        """Coloured dates for an employee's own calendar."""
        try:
            leaves = self.repository.find_by_user(user_id)
        except RepositoryError as e:
            return self._handle_exception(e, "load calendar", user_id)

        marks = [
            CalendarMark(
                leave_id=leave.id,
                leave_date=leave.leave_date,
                leave_type=leave.leave_type,
                leave_time=leave.leave_time,
                status=leave.status,
                color=leave_color(leave.leave_type),
            )
            for leave in leaves
        ]
        return ServiceResult.success(marks)
