from leave_portal.schemas.user.user import UserResponse

__all__ = ["UserResponse"]
