"""
Leave Repository

Leave request persistence with filtered, ordered and paginated listings.
Listings that feed employee names to callers eager-load the owning user
so the name is available after the session is closed.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, contains_eager

from leave_portal.core.exceptions import RepositoryError
from leave_portal.models.base.enums import LeaveStatus
from leave_portal.models.leave.leave import Leave
from leave_portal.models.user.user import User
from leave_portal.repositories.base.base_repository import BaseRepository
from leave_portal.repositories.base.filtering import Filter, FilterEngine, FilterOperator


class LeaveRepository(BaseRepository[Leave]):
    """
    Leave request repository.

    Features:
    - Create/update/delete of single-day requests
    - Per-employee listing
    - Name search and inclusive date-range filtering with pagination
    - Date-window loading for availability
    - Dashboard counters and "created since" feed
    """

    def __init__(self, db: Session):
        super().__init__(Leave, db)
        self.filters = FilterEngine(Leave, aliases={"employee_name": User.full_name})

    # ============================================================================
    # CORE CRUD OPERATIONS
    # ============================================================================

    def create_leave(self, user_id: str, leave_data: Dict[str, Any]) -> Leave:
        """Insert a new request; status always starts as Pending."""
        leave = Leave(user_id=user_id, status=LeaveStatus.PENDING, **leave_data)
        return self.create(leave)

    def update_status(self, leave_id: str, status: LeaveStatus) -> Optional[Leave]:
        return self.update(leave_id, {"status": status})

    # ============================================================================
    # LISTINGS
    # ============================================================================

    def _with_employee(self) -> Query:
        return (
            self.db.query(Leave)
            .join(Leave.user)
            .options(contains_eager(Leave.user))
        )

    def find_by_user(self, user_id: str) -> List[Leave]:
        """All requests of one employee by leave date, earliest first."""
        try:
            return (
                self.db.query(Leave)
                .filter(Leave.user_id == user_id)
                .order_by(Leave.leave_date.asc(), Leave.created_at.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Listing leaves by user failed: {str(e)}") from e

    def build_search_filters(
        self,
        search_term: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Filter]:
        """Each given criterion adds one predicate; absent ones add none."""
        filters: List[Filter] = []
        if search_term:
            filters.append(Filter("employee_name", FilterOperator.CONTAINS, search_term))
        if date_from is not None:
            filters.append(Filter("leave_date", FilterOperator.GREATER_THAN_EQUAL, date_from))
        if date_to is not None:
            filters.append(Filter("leave_date", FilterOperator.LESS_THAN_EQUAL, date_to))
        return filters

    def search(
        self,
        search_term: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Tuple[List[Leave], int]:
        """
        Filtered listing ordered by leave date.

        Args:
            search_term: Case-insensitive substring of the employee name
            date_from: Inclusive lower bound on leave_date
            date_to: Inclusive upper bound on leave_date
            offset: Rows to skip
            limit: Page size; None returns every matching row

        Returns:
            Tuple of (page rows, total matching rows)
        """
        try:
            query = self.filters.apply(
                self._with_employee(),
                self.build_search_filters(search_term, date_from, date_to),
            )
            total = query.count()
            query = query.order_by(Leave.leave_date.asc(), Leave.created_at.asc(), Leave.id.asc())
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all(), total
        except SQLAlchemyError as e:
            raise RepositoryError(f"Leave search failed: {str(e)}") from e

    def find_in_window(self, start: date, end: date) -> List[Leave]:
        """Employee requests dated within [start, end]; admin-owned rows are excluded."""
        try:
            return (
                self._with_employee()
                .filter(
                    User.is_admin.is_(False),
                    Leave.leave_date >= start,
                    Leave.leave_date <= end,
                )
                .order_by(Leave.leave_date.asc(), Leave.created_at.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise RepositoryError(f"Window lookup failed: {str(e)}") from e

    def find_created_since(self, since: Optional[datetime] = None) -> List[Leave]:
        """Requests submitted strictly after `since`, newest first."""
        try:
            query = self._with_employee()
            if since is not None:
                query = query.filter(Leave.created_at > since)
            return query.order_by(Leave.created_at.desc()).all()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Recent leave lookup failed: {str(e)}") from e

    # ============================================================================
    # COUNTERS
    # ============================================================================

    def count_on(self, day: date) -> int:
        try:
            return self.db.query(Leave).filter(Leave.leave_date == day).count()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count by date failed: {str(e)}") from e

    def count_after(self, day: date) -> int:
        try:
            return self.db.query(Leave).filter(Leave.leave_date > day).count()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count after date failed: {str(e)}") from e
