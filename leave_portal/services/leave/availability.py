"""
Weekly availability aggregation.

Pure functions that turn the employee roster plus the leave rows of one
week into per-working-day summaries of who is available, who is off for
the whole day and who is off for half of it.

Classification per employee and day:
    any Full Day row, or two or more Half Day rows  -> full day
    exactly one Half Day row and no Full Day row    -> half day
    otherwise                                       -> not on leave

Leave rows reach this module in several shapes (ORM objects, plain
mappings, join results where the employee arrives as a record, a
one-element list or not at all). `to_entry` is the single place where
they are reduced to `LeaveEntry`.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from leave_portal.config.logging import get_logger
from leave_portal.models.base.enums import LeaveTime
from leave_portal.schemas.leave.availability import DayAvailability
from leave_portal.utils.date_utils import format_day_label, weekdays_of_week

logger = get_logger(__name__)

__all__ = [
    "LeaveEntry",
    "working_days",
    "next_week_window",
    "resolve_employee_name",
    "to_entry",
    "classify",
    "aggregate_availability",
]

_JOIN_KEYS = ("user", "users", "employee")


@dataclass(frozen=True)
class LeaveEntry:
    """The three facts the aggregator needs from a leave row."""

    leave_date: str
    employee_name: Optional[str]
    leave_time: Optional[str]


def working_days(reference: date) -> List[date]:
    """Monday to Friday of the week containing `reference`."""
    return weekdays_of_week(reference)


def next_week_window(today: date) -> List[date]:
    """Working days of the week after the one containing `today`."""
    return working_days(today + timedelta(days=7))


def resolve_employee_name(related: Any) -> Optional[str]:
    """
    Employee display name from a joined user reference.

    Accepts a mapping with `full_name`, a sequence whose first element is
    such a mapping, an object with a `full_name` attribute, or None.
    """
    if related is None:
        return None
    if isinstance(related, str):
        return related or None
    if isinstance(related, Mapping):
        name = related.get("full_name")
    elif isinstance(related, Sequence):
        return resolve_employee_name(related[0]) if len(related) > 0 else None
    else:
        name = getattr(related, "full_name", None)
    return name if isinstance(name, str) and name else None


def _value(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    if isinstance(raw, Enum):
        return raw.value
    if isinstance(raw, date):
        return raw.isoformat()
    return str(raw)


def to_entry(row: Any) -> LeaveEntry:
    """Normalize one leave row of any supported shape."""
    if isinstance(row, LeaveEntry):
        return row

    if isinstance(row, Mapping):
        related = next((row[key] for key in _JOIN_KEYS if key in row), None)
        if related is None and row.get("employee_name"):
            related = row["employee_name"]
        return LeaveEntry(
            leave_date=_value(row.get("leave_date")) or "",
            employee_name=resolve_employee_name(related),
            leave_time=_value(row.get("leave_time")),
        )

    return LeaveEntry(
        leave_date=_value(getattr(row, "leave_date", None)) or "",
        employee_name=resolve_employee_name(getattr(row, "user", None)),
        leave_time=_value(getattr(row, "leave_time", None)),
    )


def classify(entries: Iterable[LeaveEntry]) -> Dict[str, str]:
    """
    Classify each employee of one day's entries as "full" or "half".

    Employees whose rows carry neither duration are left out. The result
    keeps first-seen order of the employees.
    """
    counts: Dict[str, List[int]] = {}
    for entry in entries:
        tally = counts.setdefault(entry.employee_name, [0, 0])
        if entry.leave_time == LeaveTime.FULL_DAY.value:
            tally[0] += 1
        elif entry.leave_time == LeaveTime.HALF_DAY.value:
            tally[1] += 1

    result: Dict[str, str] = {}
    for name, (full, half) in counts.items():
        if full > 0 or half >= 2:
            result[name] = "full"
        elif half == 1:
            result[name] = "half"
    return result


def aggregate_availability(
    roster: Sequence[str],
    rows: Iterable[Any],
    week_of: date,
) -> List[DayAvailability]:
    """
    Summarize availability for each working day of the week of `week_of`.

    Args:
        roster: Employee display names to consider, in display order
        rows: Leave rows; anything `to_entry` accepts. Rows of names not
            in `roster` are ignored
        week_of: Any date within the target week

    Returns:
        Five DayAvailability records, Monday first
    """
    on_roster = set(roster)
    by_date: Dict[str, List[LeaveEntry]] = {}
    for row in rows:
        entry = to_entry(row)
        if entry.employee_name is None:
            logger.warning(
                "Dropping leave row without a resolvable employee",
                extra={"leave_date": entry.leave_date},
            )
            continue
        if entry.employee_name not in on_roster:
            logger.warning(
                "Dropping leave row of an employee outside the roster",
                extra={"leave_date": entry.leave_date, "employee_name": entry.employee_name},
            )
            continue
        by_date.setdefault(entry.leave_date, []).append(entry)

    days: List[DayAvailability] = []
    for day in working_days(week_of):
        classes = classify(by_date.get(day.isoformat(), []))
        full_day = [name for name, kind in classes.items() if kind == "full"]
        half_day = [name for name, kind in classes.items() if kind == "half"]
        available = [name for name in roster if name not in classes]

        days.append(
            DayAvailability(
                date=day,
                label=format_day_label(day),
                available_count=len(available),
                on_leave_count=len(full_day) + len(half_day),
                available_employees=available,
                full_day_employees=full_day,
                half_day_employees=half_day,
            )
        )
    return days
