"""
Transfer request repository.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.base.enums import TransferStatus
from app.models.transfer.transfer_request import TransferRequest
from app.repositories.base.base_repository import BaseRepository


@dataclass(frozen=True)
class TransferFilter:
    """Criteria for listing transfer requests."""

    user_id: Optional[str] = None
    status: Optional[TransferStatus] = None
    limit: Optional[int] = None


class TransferRequestRepository(BaseRepository[TransferRequest]):
    """Repository for transfer requests."""

    def __init__(self, session: Session):
        super().__init__(TransferRequest, session)

    def find_pending_for_user(self, user_id: str) -> Optional[TransferRequest]:
        stmt = select(TransferRequest).where(
            TransferRequest.user_id == user_id,
            TransferRequest.status == TransferStatus.PENDING,
        )
        return self._scalar(stmt)

    def list_transfers(self, criteria: TransferFilter) -> List[TransferRequest]:
        """Transfers matching ``criteria``, newest first."""
        stmt = select(TransferRequest)
        if criteria.user_id is not None:
            stmt = stmt.where(TransferRequest.user_id == criteria.user_id)
        if criteria.status is not None:
            stmt = stmt.where(TransferRequest.status == criteria.status)
        stmt = stmt.order_by(TransferRequest.created_at.desc())
        return self.fetch_all(stmt, limit=criteria.limit)
