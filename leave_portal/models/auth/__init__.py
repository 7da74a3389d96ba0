from leave_portal.models.auth.user_session import UserSession

__all__ = ["UserSession"]
