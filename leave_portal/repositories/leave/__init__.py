from leave_portal.repositories.leave.leave_repository import LeaveRepository

__all__ = ["LeaveRepository"]
