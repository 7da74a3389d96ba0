"""
Leave Portal: internal leave-management service.

Employees submit leave requests for working days; administrators review
them, follow weekly team availability and export reports.
"""

__version__ = "1.0.0"
