"""
Leave request schemas: submission, review, listing queries and feeds.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import List, Optional

from pydantic import Field, field_validator

from leave_portal.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from leave_portal.models.base.enums import LeaveStatus, LeaveTime, LeaveType
from leave_portal.schemas.common.base import BaseQuerySchema, BaseResponseSchema, BaseSchema

__all__ = [
    "LeaveCreate",
    "LeaveUpdate",
    "LeaveResponse",
    "LeaveStatusUpdate",
    "LeaveQuery",
    "CalendarMark",
    "DashboardStats",
    "NotificationFeed",
]


class LeaveCreate(BaseSchema):
    """
    Leave form contents.

    Every field is optional at the schema level: a form missing any of them
    is accepted and simply not saved (see `is_submittable`).
    """

    leave_type: Optional[LeaveType] = None
    leave_purpose: Optional[str] = None
    leave_time: Optional[LeaveTime] = None
    leave_date: Optional[Date] = None

    @property
    def is_submittable(self) -> bool:
        """All four fields present and the date falls on a working day."""
        return (
            self.leave_type is not None
            and bool(self.leave_purpose)
            and self.leave_time is not None
            and self.leave_date is not None
            and self.leave_date.weekday() < 5
        )

    def to_fields(self) -> dict:
        return {
            "leave_type": self.leave_type,
            "leave_purpose": self.leave_purpose,
            "leave_time": self.leave_time,
            "leave_date": self.leave_date,
        }


class LeaveUpdate(LeaveCreate):
    """Edited form; rewrites all four fields at once."""


class LeaveResponse(BaseResponseSchema):
    user_id: str
    leave_type: LeaveType
    leave_purpose: str
    leave_time: LeaveTime
    leave_date: Date
    status: LeaveStatus
    created_at: Optional[datetime] = None
    employee_name: Optional[str] = None

    @classmethod
    def from_model(cls, leave, employee_name: Optional[str] = None) -> "LeaveResponse":
        response = cls.model_validate(leave)
        if employee_name is not None:
            response.employee_name = employee_name
        return response


class LeaveStatusUpdate(BaseSchema):
    """Admin review decision."""

    status: LeaveStatus

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: LeaveStatus) -> LeaveStatus:
        if v not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            raise ValueError("Status must be Approved or Rejected")
        return v


class LeaveQuery(BaseQuerySchema):
    """
    Filter for the admin listing and the report export.

    Name search is a case-insensitive substring; date bounds are
    inclusive. All criteria combine with AND.
    """

    search: Optional[str] = Field(default=None, description="Employee name fragment")
    date_from: Optional[Date] = Field(default=None, description="Inclusive lower bound")
    date_to: Optional[Date] = Field(default=None, description="Inclusive upper bound")
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("search")
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None and self.date_to is not None


class CalendarMark(BaseSchema):
    """One coloured day on an employee's own calendar."""

    leave_id: str
    leave_date: Date
    leave_type: LeaveType
    leave_time: LeaveTime
    status: LeaveStatus
    color: str


class DashboardStats(BaseSchema):
    total_employees: int = Field(..., ge=0, description="All user rows")
    today_leaves: int = Field(..., ge=0, description="Leaves dated today")
    upcoming_leaves: int = Field(..., ge=0, description="Leaves dated after today")


class NotificationFeed(BaseSchema):
    """Leave requests submitted since the client last looked."""

    since: Optional[datetime] = None
    count: int = Field(..., ge=0)
    items: List[LeaveResponse] = Field(default_factory=list)
