"""
Leave request model.

A leave row covers exactly one calendar date for one employee.
"""

from datetime import date as Date, datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Date as SQLDate, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from leave_portal.models.base.base_model import BaseModel
from leave_portal.models.base.enums import LeaveStatus, LeaveTime, LeaveType

if TYPE_CHECKING:
    from leave_portal.models.user.user import User

__all__ = ["Leave"]


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Leave(BaseModel):
    """
    Single-day leave request with review status.
    """

    __tablename__ = "leaves"
    __table_args__ = (
        Index("ix_leaves_user_id", "user_id"),
        Index("ix_leaves_leave_date", "leave_date"),
        Index("ix_leaves_status", "status"),
        Index("ix_leaves_user_date", "user_id", "leave_date"),
        {"comment": "Leave requests"},
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Requesting employee"
    )
    leave_type: Mapped[LeaveType] = mapped_column(
        Enum(LeaveType, name="leave_type_enum", native_enum=False, values_callable=_enum_values, length=32),
        nullable=False,
        comment="Type of leave being requested"
    )
    leave_purpose: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free text purpose"
    )
    leave_time: Mapped[LeaveTime] = mapped_column(
        Enum(LeaveTime, name="leave_time_enum", native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
        comment="Half Day or Full Day"
    )
    leave_date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        comment="Calendar date of the leave (no time component)"
    )
    status: Mapped[LeaveStatus] = mapped_column(
        Enum(LeaveStatus, name="leave_status_enum", native_enum=False, values_callable=_enum_values, length=16),
        nullable=False,
        default=LeaveStatus.PENDING,
        comment="Review status"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        comment="Submission timestamp (UTC)"
    )

    user: Mapped["User"] = relationship("User", back_populates="leaves")
