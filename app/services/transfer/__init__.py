"""Transfer services."""
from app.services.transfer.transfer_request_service import (
    UNASSIGNED_DEPARTMENT,
    TransferRequestService,
)

__all__ = ["TransferRequestService", "UNASSIGNED_DEPARTMENT"]
