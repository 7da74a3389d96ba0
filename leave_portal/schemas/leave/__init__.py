from leave_portal.schemas.leave.availability import DayAvailability, WeeklyAvailability
from leave_portal.schemas.leave.leave import (
    CalendarMark,
    DashboardStats,
    LeaveCreate,
    LeaveQuery,
    LeaveResponse,
    LeaveStatusUpdate,
    LeaveUpdate,
    NotificationFeed,
)

__all__ = [
    "CalendarMark",
    "DashboardStats",
    "DayAvailability",
    "LeaveCreate",
    "LeaveQuery",
    "LeaveResponse",
    "LeaveStatusUpdate",
    "LeaveUpdate",
    "NotificationFeed",
    "WeeklyAvailability",
]
