from leave_portal.services.user.user_service import UserService

__all__ = ["UserService"]
