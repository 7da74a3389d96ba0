"""
Administrator routes: review, listing, dashboard, availability, export
and notifications.
"""
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from leave_portal.api import deps
from leave_portal.schemas.common.pagination import PaginatedResponse
from leave_portal.schemas.leave import (
    DashboardStats,
    LeaveQuery,
    LeaveResponse,
    LeaveStatusUpdate,
    NotificationFeed,
    WeeklyAvailability,
)
from leave_portal.services.leave import (
    AvailabilityService,
    LeaveExportService,
    LeaveNotificationService,
    LeaveService,
)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(deps.require_admin)])


@router.get("/leaves", response_model=PaginatedResponse[LeaveResponse])
def list_leaves(
    query: LeaveQuery = Depends(deps.get_leave_query),
    db: Session = Depends(deps.get_db),
):
    return deps.unwrap(LeaveService(db).list_by_filter(query))


@router.get("/leaves/export")
def export_leaves(
    query: LeaveQuery = Depends(deps.get_leave_query),
    db: Session = Depends(deps.get_db),
):
    export = deps.unwrap(LeaveExportService(db).export(query))
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.patch("/leaves/{leave_id}/status", response_model=LeaveResponse)
def set_leave_status(
    leave_id: str,
    payload: LeaveStatusUpdate,
    db: Session = Depends(deps.get_db),
):
    return deps.unwrap(LeaveService(db).set_status(leave_id, payload.status))


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(db: Session = Depends(deps.get_db)):
    return deps.unwrap(LeaveService(db).dashboard_stats())


@router.get("/availability", response_model=WeeklyAvailability)
def availability(
    week_of: Optional[date] = Query(default=None, description="Any date in the wanted week; defaults to next week"),
    db: Session = Depends(deps.get_db),
):
    return deps.unwrap(AvailabilityService(db).weekly_availability(week_of))


@router.get("/notifications", response_model=NotificationFeed)
def notifications(
    since: Optional[datetime] = Query(default=None, description="Last time the feed was viewed"),
    db: Session = Depends(deps.get_db),
):
    return deps.unwrap(LeaveNotificationService(db).new_requests(since))
