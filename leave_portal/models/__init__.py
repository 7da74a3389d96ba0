"""
Database models for users, sign-in sessions and leave requests.
"""

from leave_portal.models.base import Base, BaseModel, LeaveStatus, LeaveTime, LeaveType
from leave_portal.models.user.user import User
from leave_portal.models.auth.user_session import UserSession
from leave_portal.models.leave.leave import Leave

__all__ = [
    "Base",
    "BaseModel",
    "LeaveStatus",
    "LeaveTime",
    "LeaveType",
    "User",
    "UserSession",
    "Leave",
]
