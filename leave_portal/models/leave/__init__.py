from leave_portal.models.leave.leave import Leave

__all__ = ["Leave"]
