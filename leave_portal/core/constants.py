# leave_portal/core/constants.py
from __future__ import annotations

"""
Core application constants.

These values centralize literals shared across the application:
- Pagination defaults.
- Leave calendar colours.
- Report layout.
- Common HTTP header names.
"""

from typing import Dict, Tuple

# Pagination defaults
DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100

# API prefixes
API_PREFIX: str = "/api"
API_V1_PREFIX: str = "/api/v1"

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Calendar background colours keyed by stored leave type
LEAVE_COLORS: Dict[str, str] = {
    "Study Leave": "rgba(59, 130, 246, 0.2)",  # Blue
    "Exam Leave": "rgba(16, 185, 129, 0.2)",  # Green
    "Medical Leave": "rgba(239, 68, 68, 0.2)",  # Red
    "Annual Leave": "rgba(245, 158, 11, 0.2)",  # Yellow
    "Parental Leave": "rgba(168, 85, 247, 0.2)",  # Purple
}
DEFAULT_LEAVE_COLOR: str = "rgba(156, 163, 175, 0.2)"  # Gray

# Exported report
REPORT_SHEET_NAME: str = "Leave Report"
REPORT_COLUMNS: Tuple[str, ...] = (
    "Leave Date",
    "Employee Name",
    "Leave Type",
    "Leave Purpose",
    "Leave Time",
)
REPORT_MEDIA_TYPE: str = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# User-visible messages
MSG_USER_NOT_FOUND: str = "User not found"
MSG_INVALID_PASSWORD: str = "Invalid password"
MSG_SESSION_FAILED: str = "Error creating session"
MSG_EXPORT_NEEDS_RANGE: str = "Please select a date range before exporting"

# Live notification listener
NOTIFICATION_RECENT_LIMIT: int = 50
