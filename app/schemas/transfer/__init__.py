"""Transfer schemas."""
from app.schemas.transfer.transfer_request import (
    TransferCreateRequest,
    TransferDecisionRequest,
    TransferListData,
    TransferResponse,
)

__all__ = [
    "TransferCreateRequest",
    "TransferDecisionRequest",
    "TransferResponse",
    "TransferListData",
]
