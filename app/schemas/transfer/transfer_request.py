"""
Transfer request schemas.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator

from app.models.base.enums import TransferStatus
from app.schemas.common.base import BaseDBSchema, BaseSchema
from app.schemas.user.user import UserSummary

__all__ = [
    "TransferCreateRequest",
    "TransferDecisionRequest",
    "TransferResponse",
    "TransferListData",
]


class TransferCreateRequest(BaseSchema):
    requested_department: str = Field(..., min_length=1, max_length=100)
    reason: str = Field(..., min_length=10, max_length=2000)


class TransferDecisionRequest(BaseSchema):
    status: TransferStatus
    approver_remarks: Optional[str] = Field(default=None, max_length=500)
    effective_date: Optional[date] = None

    @field_validator("status")
    @classmethod
    def validate_decision(cls, v: TransferStatus) -> TransferStatus:
        if v == TransferStatus.PENDING:
            raise ValueError("status must be approved or rejected")
        return v


class TransferResponse(BaseDBSchema):
    current_department: str
    requested_department: str
    reason: str
    status: TransferStatus
    user: UserSummary
    approved_by: Optional[UserSummary] = None
    approver_remarks: Optional[str] = None
    effective_date: Optional[date] = None


class TransferListData(BaseSchema):
    transfers: List[TransferResponse]
    count: int
