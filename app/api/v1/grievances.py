"""
Grievance endpoints. Filing accepts multipart form data with an optional
attachment (PDF, JPEG or PNG).
"""

from typing import Optional

import pydantic
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.api import deps
from app.core.exceptions import ValidationError
from app.core.security.permissions import Actor
from app.models.base.enums import GrievanceCategory, GrievancePriority, GrievanceStatus
from app.schemas.common import SuccessResponse
from app.schemas.grievance import (
    GrievanceCreate,
    GrievanceListData,
    GrievanceRespondRequest,
    GrievanceResponse,
)
from app.services.file_management import UploadedFile
from app.services.grievance import GrievanceService

router = APIRouter(prefix="/grievances")


def _listing(grievances) -> GrievanceListData:
    return GrievanceListData(
        grievances=[GrievanceResponse.model_validate(g) for g in grievances],
        count=len(grievances),
    )


def _read_upload(file: Optional[UploadFile]) -> Optional[UploadedFile]:
    if file is None or not file.filename:
        return None
    return UploadedFile(
        filename=file.filename,
        content_type=file.content_type or "application/octet-stream",
        data=file.file.read(),
    )


@router.post("", response_model=SuccessResponse[GrievanceResponse], status_code=status.HTTP_201_CREATED)
def create_grievance(
    category: GrievanceCategory = Form(...),
    description: str = Form(...),
    priority: GrievancePriority = Form(GrievancePriority.MEDIUM),
    file: Optional[UploadFile] = File(None),
    actor: Actor = Depends(deps.get_current_actor),
    service: GrievanceService = Depends(deps.get_grievance_service),
):
    try:
        payload = GrievanceCreate(category=category, description=description, priority=priority)
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Validation failed",
            [{"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in e.errors()],
        ) from e

    result = service.create(actor, payload, _read_upload(file))
    return SuccessResponse.create(message=result.message, data=GrievanceResponse.model_validate(result.unwrap()))


@router.get("/my", response_model=SuccessResponse[GrievanceListData])
def my_grievances(
    status_filter: Optional[GrievanceStatus] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100),
    actor: Actor = Depends(deps.get_current_actor),
    service: GrievanceService = Depends(deps.get_grievance_service),
):
    grievances = service.list_mine(actor, status=status_filter, limit=limit).unwrap()
    return SuccessResponse.create(data=_listing(grievances))


@router.get("", response_model=SuccessResponse[GrievanceListData])
def all_grievances(
    status_filter: Optional[GrievanceStatus] = Query(None, alias="status"),
    category: Optional[GrievanceCategory] = Query(None),
    priority: Optional[GrievancePriority] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    actor: Actor = Depends(deps.get_current_actor),
    service: GrievanceService = Depends(deps.get_grievance_service),
):
    grievances = service.list_all(
        actor, status=status_filter, category=category, priority=priority, limit=limit
    ).unwrap()
    return SuccessResponse.create(data=_listing(grievances))


@router.patch("/{grievance_id}/respond", response_model=SuccessResponse[GrievanceResponse])
def respond_grievance(
    grievance_id: str,
    payload: GrievanceRespondRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: GrievanceService = Depends(deps.get_grievance_service),
):
    result = service.respond(actor, grievance_id, payload)
    return SuccessResponse.create(message=result.message, data=GrievanceResponse.model_validate(result.unwrap()))
