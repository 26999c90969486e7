"""
Attendance endpoints.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.security.permissions import Actor
from app.schemas.attendance import AttendanceListData, AttendanceMarkRequest, AttendanceResponse
from app.schemas.common import SuccessResponse
from app.services.attendance import AttendanceService

router = APIRouter(prefix="/attendance")


def _listing(records) -> AttendanceListData:
    return AttendanceListData(
        attendance=[AttendanceResponse.model_validate(r) for r in records],
        count=len(records),
    )


@router.post("/mark", response_model=SuccessResponse[AttendanceResponse], status_code=status.HTTP_201_CREATED)
def mark_attendance(
    payload: AttendanceMarkRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: AttendanceService = Depends(deps.get_attendance_service),
):
    result = service.mark(actor, payload)
    return SuccessResponse.create(message=result.message, data=AttendanceResponse.model_validate(result.unwrap()))


@router.get("/my", response_model=SuccessResponse[AttendanceListData])
def my_attendance(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: int = Query(30, ge=1, le=366),
    actor: Actor = Depends(deps.get_current_actor),
    service: AttendanceService = Depends(deps.get_attendance_service),
):
    records = service.list_mine(actor, start_date=start_date, end_date=end_date, limit=limit).unwrap()
    return SuccessResponse.create(data=_listing(records))


@router.get("", response_model=SuccessResponse[AttendanceListData])
def all_attendance(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    user_id: Optional[str] = Query(None),
    department: Optional[str] = Query(None, max_length=100),
    limit: int = Query(100, ge=1, le=500),
    actor: Actor = Depends(deps.get_current_actor),
    service: AttendanceService = Depends(deps.get_attendance_service),
):
    records = service.list_all(
        actor,
        start_date=start_date,
        end_date=end_date,
        user_id=user_id,
        department=department,
        limit=limit,
    ).unwrap()
    return SuccessResponse.create(data=_listing(records))
