"""
Sign-in session model.

One row per successful sign-in; the row id travels inside the client's
access token and the row is deleted on sign-out.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from leave_portal.models.base.base_model import BaseModel

if TYPE_CHECKING:
    from leave_portal.models.user.user import User

__all__ = ["UserSession"]


class UserSession(BaseModel):
    """
    Active sign-in session.
    """

    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_user_id", "user_id"),
        Index("ix_sessions_created_at", "created_at"),
        {"comment": "Sign-in sessions"},
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Signed-in user"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        comment="Sign-in timestamp (UTC)"
    )

    user: Mapped["User"] = relationship("User", back_populates="sessions")
