from leave_portal.models.user.user import User

__all__ = ["User"]
