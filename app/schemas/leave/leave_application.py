"""
Leave application schemas.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from app.models.base.enums import LeaveStatus, LeaveType
from app.schemas.common.base import BaseDBSchema, BaseSchema
from app.schemas.user.user import UserSummary

__all__ = [
    "LeaveApplyRequest",
    "LeaveDecisionRequest",
    "LeaveResponse",
    "LeaveListData",
]


class LeaveApplyRequest(BaseSchema):
    """Leave request; both dates are inclusive."""

    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: str = Field(..., min_length=5, max_length=1000)

    @model_validator(mode="after")
    def validate_date_order(self) -> "LeaveApplyRequest":
        if self.from_date > self.to_date:
            raise ValueError("from_date must be on or before to_date")
        return self


class LeaveDecisionRequest(BaseSchema):
    status: LeaveStatus
    approver_remarks: Optional[str] = Field(default=None, max_length=500)

    @field_validator("status")
    @classmethod
    def validate_decision(cls, v: LeaveStatus) -> LeaveStatus:
        if v == LeaveStatus.PENDING:
            raise ValueError("status must be approved or rejected")
        return v


class LeaveResponse(BaseDBSchema):
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    user: UserSummary
    approved_by: Optional[UserSummary] = None
    approver_remarks: Optional[str] = None


class LeaveListData(BaseSchema):
    leaves: List[LeaveResponse]
    count: int
