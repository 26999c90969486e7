"""
Transfer endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.security.permissions import Actor
from app.models.base.enums import TransferStatus
from app.schemas.common import SuccessResponse
from app.schemas.transfer import (
    TransferCreateRequest,
    TransferDecisionRequest,
    TransferListData,
    TransferResponse,
)
from app.services.transfer import TransferRequestService

router = APIRouter(prefix="/transfers")


def _listing(transfers) -> TransferListData:
    return TransferListData(
        transfers=[TransferResponse.model_validate(t) for t in transfers],
        count=len(transfers),
    )


@router.post("/request", response_model=SuccessResponse[TransferResponse], status_code=status.HTTP_201_CREATED)
def request_transfer(
    payload: TransferCreateRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: TransferRequestService = Depends(deps.get_transfer_service),
):
    result = service.request_transfer(actor, payload)
    return SuccessResponse.create(message=result.message, data=TransferResponse.model_validate(result.unwrap()))


@router.get("/my", response_model=SuccessResponse[TransferListData])
def my_transfers(
    actor: Actor = Depends(deps.get_current_actor),
    service: TransferRequestService = Depends(deps.get_transfer_service),
):
    return SuccessResponse.create(data=_listing(service.list_mine(actor).unwrap()))


@router.get("", response_model=SuccessResponse[TransferListData])
def all_transfers(
    status_filter: Optional[TransferStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    actor: Actor = Depends(deps.get_current_actor),
    service: TransferRequestService = Depends(deps.get_transfer_service),
):
    transfers = service.list_all(actor, status=status_filter, limit=limit).unwrap()
    return SuccessResponse.create(data=_listing(transfers))


@router.patch("/{transfer_id}/approve", response_model=SuccessResponse[TransferResponse])
def decide_transfer(
    transfer_id: str,
    payload: TransferDecisionRequest,
    actor: Actor = Depends(deps.get_current_actor),
    service: TransferRequestService = Depends(deps.get_transfer_service),
):
    result = service.decide(actor, transfer_id, payload)
    return SuccessResponse.create(message=result.message, data=TransferResponse.model_validate(result.unwrap()))
