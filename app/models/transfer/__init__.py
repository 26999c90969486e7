"""Transfer models."""
from app.models.transfer.transfer_request import TransferRequest

__all__ = ["TransferRequest"]
