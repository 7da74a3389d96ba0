"""
Employee leave routes: own listing, calendar, submit, edit, delete.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from leave_portal.api import deps
from leave_portal.models.user.user import User
from leave_portal.schemas.leave import CalendarMark, LeaveCreate, LeaveResponse, LeaveUpdate
from leave_portal.services.leave import LeaveService

router = APIRouter(prefix="/leaves", tags=["Leaves"])


def get_leave_service(db: Session = Depends(deps.get_db)) -> LeaveService:
    return LeaveService(db)


@router.get("/mine", response_model=List[LeaveResponse])
def list_my_leaves(
    user: User = Depends(deps.require_employee),
    service: LeaveService = Depends(get_leave_service),
):
    return deps.unwrap(service.list_by_user(user.id))


@router.get("/mine/calendar", response_model=List[CalendarMark])
def my_calendar(
    user: User = Depends(deps.require_employee),
    service: LeaveService = Depends(get_leave_service),
):
    return deps.unwrap(service.calendar_marks(user.id))


@router.post("", response_model=Optional[LeaveResponse])
def submit_leave(
    payload: LeaveCreate,
    user: User = Depends(deps.require_employee),
    service: LeaveService = Depends(get_leave_service),
):
    return deps.unwrap(service.create(user.id, payload))


@router.put("/{leave_id}", response_model=Optional[LeaveResponse])
def edit_leave(
    leave_id: str,
    payload: LeaveUpdate,
    user: User = Depends(deps.require_employee),
    service: LeaveService = Depends(get_leave_service),
):
    return deps.unwrap(service.update(leave_id, payload, actor=user))


@router.delete("/{leave_id}")
def delete_leave(
    leave_id: str,
    user: User = Depends(deps.require_employee),
    service: LeaveService = Depends(get_leave_service),
):
    return {"deleted": deps.unwrap(service.delete(leave_id, actor=user))}
