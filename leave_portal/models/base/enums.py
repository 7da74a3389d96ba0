"""
Database enums mirroring schema enums.

Values are the strings stored in the `leaves` table and shown to users.
"""

import enum


class LeaveType(str, enum.Enum):
    """Leave type enumeration."""
    STUDY = "Study Leave"
    EXAM = "Exam Leave"
    MEDICAL = "Medical Leave"
    ANNUAL = "Annual Leave"
    PARENTAL = "Parental Leave"


class LeaveTime(str, enum.Enum):
    """Duration of a single leave record."""
    HALF_DAY = "Half Day"
    FULL_DAY = "Full Day"


class LeaveStatus(str, enum.Enum):
    """Leave request review status."""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
