"""
Leave report export.

Builds the admin spreadsheet: every leave matching the current filter
within a required date range, one sheet, fixed columns, earliest date
first. Export ignores pagination.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from leave_portal.core.constants import (
    MSG_EXPORT_NEEDS_RANGE,
    REPORT_COLUMNS,
    REPORT_MEDIA_TYPE,
    REPORT_SHEET_NAME,
)
from leave_portal.core.exceptions import InvalidDateRangeError, RepositoryError
from leave_portal.models.leave.leave import Leave
from leave_portal.repositories.leave.leave_repository import LeaveRepository
from leave_portal.schemas.leave.leave import LeaveQuery
from leave_portal.services.base import BaseService, ErrorCode, ErrorSeverity, ServiceError, ServiceResult
from leave_portal.services.leave.availability import resolve_employee_name
from leave_portal.utils.excel_utils import ExcelGenerator, records_to_frame


@dataclass(frozen=True)
class ExportFile:
    """A generated report ready to be downloaded."""

    filename: str
    content: bytes
    media_type: str = REPORT_MEDIA_TYPE
    row_count: int = 0


def report_filename(query: LeaveQuery) -> str:
    return f"leave_report_{query.date_from.isoformat()}_to_{query.date_to.isoformat()}.xlsx"


def report_row(leave: Leave) -> Dict[str, Any]:
    return {
        "Leave Date": leave.leave_date.isoformat(),
        "Employee Name": resolve_employee_name(leave.user) or "",
        "Leave Type": leave.leave_type.value,
        "Leave Purpose": leave.leave_purpose,
        "Leave Time": leave.leave_time.value,
    }


class LeaveExportService(BaseService[LeaveRepository]):
    """Spreadsheet export of filtered leave requests."""

    def __init__(self, db: Session):
        super().__init__(LeaveRepository(db), db)

    def export(self, query: LeaveQuery) -> ServiceResult[ExportFile]:
        """
        Export the leaves matching `query` as an xlsx workbook.

        Both date bounds are required; the name search is optional.
        """
        try:
            self._check_range(query)
        except InvalidDateRangeError as e:
            self._logger.info(f"Export refused: {e.message}")
            return ServiceResult.failure(
                ServiceError(
                    code=ErrorCode.INVALID_DATE_RANGE,
                    message=e.message,
                    details=e.details,
                    severity=ErrorSeverity.WARNING,
                )
            )

        try:
            leaves, total = self.repository.search(
                search_term=query.search,
                date_from=query.date_from,
                date_to=query.date_to,
            )
        except RepositoryError as e:
            return self._handle_exception(e, "export leaves", additional_context=query.model_dump(mode="json"))

        rows: List[Dict[str, Any]] = [report_row(leave) for leave in leaves]
        frame = records_to_frame(rows, list(REPORT_COLUMNS))
        if not frame.empty:
            frame = frame.sort_values("Leave Date", kind="stable").reset_index(drop=True)

        generator = ExcelGenerator()
        generator.add_dataframe_sheet(REPORT_SHEET_NAME, frame)

        export = ExportFile(
            filename=report_filename(query),
            content=generator.to_bytes(),
            row_count=total,
        )
        self._logger.info(f"Exported {total} leaves to {export.filename}")
        return ServiceResult.success(export)

    @staticmethod
    def _check_range(query: LeaveQuery) -> None:
        if not query.has_date_range:
            raise InvalidDateRangeError(MSG_EXPORT_NEEDS_RANGE)
        if query.date_from > query.date_to:
            raise InvalidDateRangeError(
                "Start date must not be after end date",
                details={"date_from": query.date_from.isoformat(), "date_to": query.date_to.isoformat()},
            )
