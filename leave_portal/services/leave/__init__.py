from leave_portal.services.leave.availability_service import AvailabilityService
from leave_portal.services.leave.leave_export_service import ExportFile, LeaveExportService
from leave_portal.services.leave.leave_notification_service import (
    LeaveNotificationListener,
    LeaveNotificationService,
)
from leave_portal.services.leave.leave_service import LeaveService

__all__ = [
    "AvailabilityService",
    "ExportFile",
    "LeaveExportService",
    "LeaveNotificationListener",
    "LeaveNotificationService",
    "LeaveService",
]
