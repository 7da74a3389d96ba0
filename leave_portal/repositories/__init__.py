"""
Data access layer over the `users`, `sessions` and `leaves` tables.
"""

from leave_portal.repositories.base.base_repository import BaseRepository
from leave_portal.repositories.user.user_repository import UserRepository
from leave_portal.repositories.auth.session_repository import SessionRepository
from leave_portal.repositories.leave.leave_repository import LeaveRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "SessionRepository",
    "LeaveRepository",
]
