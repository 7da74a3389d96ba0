"""
Weekly availability schemas. JSON keys are camelCase.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from leave_portal.schemas.common.base import BaseSchema

__all__ = ["DayAvailability", "WeeklyAvailability"]


class _CamelSchema(BaseSchema):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        frozen=True,
    )


class DayAvailability(_CamelSchema):
    """Who is in and who is off on one working day."""

    date: Date
    label: str
    available_count: int = Field(..., ge=0)
    on_leave_count: int = Field(..., ge=0)
    available_employees: List[str] = Field(default_factory=list)
    full_day_employees: List[str] = Field(default_factory=list)
    half_day_employees: List[str] = Field(default_factory=list)


class WeeklyAvailability(_CamelSchema):
    week_start: Date
    week_end: Date
    days: List[DayAvailability]
