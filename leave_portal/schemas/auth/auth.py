"""
Sign-in and session schemas.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from leave_portal.schemas.common.base import BaseSchema
from leave_portal.schemas.user.user import UserResponse

__all__ = [
    "View",
    "SignInRequest",
    "TokenResponse",
    "CurrentView",
]

View = Literal["signin", "admin", "employee"]


class SignInRequest(BaseSchema):
    """Email and password as typed by the user."""

    email: str = Field(..., min_length=1, description="Account email (exact match)")
    password: str = Field(..., min_length=1, description="Plain password")


class TokenResponse(BaseSchema):
    """Issued bearer token for a new session."""

    access_token: str = Field(..., description="Signed access token")
    token_type: str = Field(default="bearer")
    expires_in: int = Field(..., description="Lifetime in seconds")
    session_id: str = Field(..., description="Session row backing the token")
    user: UserResponse


class CurrentView(BaseSchema):
    """Which screen a client should show for its token."""

    view: View
    user: Optional[UserResponse] = None
