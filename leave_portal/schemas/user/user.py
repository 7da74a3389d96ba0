"""
User schemas.
"""

from __future__ import annotations

from pydantic import Field

from leave_portal.schemas.common.base import BaseResponseSchema

__all__ = ["UserResponse"]


class UserResponse(BaseResponseSchema):
    """Public view of an account. Never carries the password hash."""

    full_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Sign-in email")
    is_admin: bool = Field(default=False, description="Administrator flag")
