"""
Configuration package for the leave portal.

Contains environment settings and logging configuration.
"""

from leave_portal.config.settings import settings, get_settings
from leave_portal.config.logging import setup_logging, get_logger

__all__ = ["settings", "get_settings", "setup_logging", "get_logger"]
