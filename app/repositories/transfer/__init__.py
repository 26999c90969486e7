"""Transfer repositories."""
from app.repositories.transfer.transfer_request_repository import (
    TransferFilter,
    TransferRequestRepository,
)

__all__ = ["TransferFilter", "TransferRequestRepository"]
