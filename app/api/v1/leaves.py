"""
Leave endpoints: apply, own history, review queue and decisions.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.security.permissions import Actor
from app.models.base.enums import LeaveStatus
from app.schemas.common import SuccessResponse
from app.schemas.leave import LeaveApplyRequest, LeaveDecisionRequest, LeaveListData, LeaveResponse
from app.services.leave import LeaveApplicationService

router = APIRouter(prefix="/leave")


def _listing(leaves) -> LeaveListData:
    return LeaveListData(leaves=[LeaveResponse.model_validate(leave) for leave in leaves], count=len(leaves))


@router.post("/apply", response_model=SuccessResponse[LeaveResponse], status_code=status.HTTP_201_CREATED)
def apply_leave(
    payload: LeaveApplyRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: LeaveApplicationService = Depends(deps.get_leave_service),
):
    result = service.apply(actor, payload)
    return SuccessResponse.create(message=result.message, data=LeaveResponse.model_validate(result.unwrap()))


@router.get("/my", response_model=SuccessResponse[LeaveListData])
def my_leaves(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(deps.get_current_actor),
    service: LeaveApplicationService = Depends(deps.get_leave_service),
):
    leaves = service.list_mine(actor, status=status_filter, limit=limit).unwrap()
    return SuccessResponse.create(data=_listing(leaves))


@router.get("", response_model=SuccessResponse[LeaveListData])
def all_leaves(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    department: Optional[str] = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=200),
    actor: Actor = Depends(deps.get_current_actor),
    service: LeaveApplicationService = Depends(deps.get_leave_service),
):
    leaves = service.list_all(actor, status=status_filter, department=department, limit=limit).unwrap()
    return SuccessResponse.create(data=_listing(leaves))


@router.patch("/{leave_id}/status", response_model=SuccessResponse[LeaveResponse])
def decide_leave(
    leave_id: str,
    payload: LeaveDecisionRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: LeaveApplicationService = Depends(deps.get_leave_service),
):
    result = service.decide(actor, leave_id, payload)
    return SuccessResponse.create(message=result.message, data=LeaveResponse.model_validate(result.unwrap()))
