from leave_portal.repositories.auth.session_repository import SessionRepository

__all__ = ["SessionRepository"]
