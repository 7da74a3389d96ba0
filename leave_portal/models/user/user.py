"""
User account model.

Accounts are provisioned outside the request path; the application only
reads them.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leave_portal.models.base.base_model import BaseModel
from leave_portal.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from leave_portal.models.auth.user_session import UserSession
    from leave_portal.models.leave.leave import Leave

__all__ = ["User"]


class User(BaseModel, TimestampMixin):
    """
    Employee or administrator account.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_email", "email", unique=True),
        {"comment": "Portal accounts"},
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, used as the identity key in availability views"
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Sign-in email (exact match)"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the account password"
    )
    is_admin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Administrators review requests and are excluded from the roster"
    )

    sessions: Mapped[List["UserSession"]] = relationship(
        "UserSession",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    leaves: Mapped[List["Leave"]] = relationship(
        "Leave",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} is_admin={self.is_admin}>"
