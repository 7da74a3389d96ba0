# leave_portal/utils/date_utils.py
from __future__ import annotations

"""
Date and time utility functions used across the project.

Notes:
- All "UTC" helpers use timezone-aware datetimes with `timezone.utc`.
- "Today" for leave purposes is the calendar date in the configured
  TIMEZONE setting, not the server's local date.
- `to_utc` assumes naive datetimes are already in UTC and only attaches
  tzinfo.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from leave_portal.config.settings import settings

logger = logging.getLogger(__name__)

UTC = timezone.utc


class DateUtilsError(Exception):
    """Custom exception for date utilities errors."""
    pass


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def local_zone(name: Optional[str] = None) -> ZoneInfo:
    """Resolve the configured timezone."""
    zone_name = name or settings.TIMEZONE
    try:
        return ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.error(f"Unknown timezone {zone_name!r}: {e}")
        raise DateUtilsError(f"Unknown timezone: {zone_name}") from e


def today_local(tz_name: Optional[str] = None) -> date:
    """Return today's date in the configured timezone."""
    return datetime.now(local_zone(tz_name)).date()


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC; naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5


def week_start(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def weekdays_of_week(d: date) -> List[date]:
    """Monday through Friday of the week containing d, in order."""
    monday = week_start(d)
    return [monday + timedelta(days=offset) for offset in range(5)]


def format_day_label(d: date) -> str:
    """Short chart label, e.g. 'March 3'."""
    return f"{d.strftime('%B')} {d.day}"
