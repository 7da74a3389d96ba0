"""
Availability service: loads the roster and a week's leave rows and runs
the aggregation.
"""

from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from leave_portal.core.exceptions import RepositoryError
from leave_portal.repositories.leave.leave_repository import LeaveRepository
from leave_portal.repositories.user.user_repository import UserRepository
from leave_portal.schemas.leave.availability import WeeklyAvailability
from leave_portal.services.base import BaseService, ServiceResult
from leave_portal.services.leave.availability import aggregate_availability, working_days
from leave_portal.utils.date_utils import today_local


class AvailabilityService(BaseService[LeaveRepository]):
    """
    Weekly staff availability for the admin chart.

    Leave rows of every status count toward availability.
    """

    def __init__(self, db: Session):
        super().__init__(LeaveRepository(db), db)
        self.user_repository = UserRepository(db)

    def weekly_availability(self, week_of: Optional[date] = None) -> ServiceResult[WeeklyAvailability]:
        """
        Availability for the working days of the week containing `week_of`.

        Defaults to next week relative to today in the configured timezone.
        """
        reference = week_of or today_local() + timedelta(days=7)
        days = working_days(reference)

        try:
            roster = self.user_repository.find_roster_names()
            rows = self.repository.find_in_window(days[0], days[-1])
        except RepositoryError as e:
            return self._handle_exception(e, "load weekly availability", reference)

        summary = WeeklyAvailability(
            week_start=days[0],
            week_end=days[-1],
            days=aggregate_availability(roster, rows, reference),
        )
        self._logger.debug(
            f"Availability computed for week of {days[0].isoformat()}",
            extra={"roster_size": len(roster), "rows": len(rows)},
        )
        return ServiceResult.success(summary)
