# leave_portal/api/deps.py
"""
FastAPI dependencies: database session, bearer-token identity, role
checks and the translation of failed service results into HTTP errors.

Example usage in a router:
    @router.get("/me")
    def read_me(current_user: User = Depends(deps.get_current_user)):
        return current_user
"""
from __future__ import annotations

from datetime import date
from typing import Optional, TypeVar

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from leave_portal.config.settings import settings
from leave_portal.core.constants import MAX_PAGE_SIZE
from leave_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaseAppException,
    ErrorCode as AppErrorCode,
)
from leave_portal.db.session import get_db
from leave_portal.models.auth.user_session import UserSession
from leave_portal.models.user.user import User
from leave_portal.schemas.leave.leave import LeaveQuery
from leave_portal.services.auth import AuthenticationService
from leave_portal.services.base import ErrorCode, ServiceResult

T = TypeVar("T")

bearer_scheme = HTTPBearer(auto_error=False)

_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: (422, AppErrorCode.VALIDATION_ERROR),
    ErrorCode.NOT_FOUND: (404, AppErrorCode.RESOURCE_NOT_FOUND),
    ErrorCode.UNAUTHORIZED: (401, AppErrorCode.AUTHENTICATION_FAILED),
    ErrorCode.AUTHENTICATION_FAILED: (401, AppErrorCode.AUTHENTICATION_FAILED),
    ErrorCode.INSUFFICIENT_PERMISSIONS: (403, AppErrorCode.AUTHORIZATION_FAILED),
    ErrorCode.INVALID_DATE_RANGE: (400, AppErrorCode.INVALID_DATE_RANGE),
}


# --- Results --------------------------------------------------------------------

def unwrap(result: ServiceResult[T]) -> T:
    """Return the result's data or raise the matching HTTP error."""
    if result.is_success:
        return result.data

    error = result.error
    status_code, app_code = _STATUS_BY_CODE.get(error.code, (500, AppErrorCode.INTERNAL_ERROR))
    details = {"field": error.field} if error.field else {}
    raise BaseAppException(error.message, app_code, details, status_code)


# --- Authentication & Authorization ---------------------------------------------

def get_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def get_auth_service(db: Session = Depends(get_db)) -> AuthenticationService:
    return AuthenticationService(db)


def get_current_session(
    token: Optional[str] = Depends(get_token),
    auth: AuthenticationService = Depends(get_auth_service),
) -> UserSession:
    session = auth.get_current_session(token)
    if session is None:
        raise AuthenticationError("Not authenticated")
    return session


def get_current_user(
    session: UserSession = Depends(get_current_session),
    auth: AuthenticationService = Depends(get_auth_service),
) -> User:
    user = auth.get_user(session.user_id)
    if user is None:
        raise AuthenticationError("Not authenticated")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise AuthorizationError("Administrator access required")
    return user


def require_employee(user: User = Depends(get_current_user)) -> User:
    if user.is_admin:
        raise AuthorizationError("Employee access required")
    return user


# --- Queries ----------------------------------------------------------------------

def get_leave_query(
    search: Optional[str] = Query(default=None, description="Employee name fragment"),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> LeaveQuery:
    return LeaveQuery(
        search=search,
        date_from=date_from,
        date_to=date_to,
        page=page,
        page_size=page_size,
    )


__all__ = [
    "get_db",
    "unwrap",
    "get_token",
    "get_auth_service",
    "get_current_session",
    "get_current_user",
    "require_admin",
    "require_employee",
    "get_leave_query",
]
