"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from leave_portal.models.base.base_model import Base, BaseModel
from leave_portal.models.base.mixins import TimestampMixin
from leave_portal.models.base.enums import LeaveStatus, LeaveTime, LeaveType

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "LeaveStatus",
    "LeaveTime",
    "LeaveType",
]
