"""
Grievance schemas.

``GrievanceCreate`` is populated from multipart form fields because the
create endpoint also accepts an optional file.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.models.base.enums import GrievanceCategory, GrievancePriority, GrievanceStatus
from app.schemas.common.base import BaseDBSchema, BaseSchema
from app.schemas.user.user import UserSummary

__all__ = [
    "GrievanceCreate",
    "GrievanceRespondRequest",
    "GrievanceResponse",
    "GrievanceListData",
]


class GrievanceCreate(BaseSchema):
    category: GrievanceCategory
    description: str = Field(..., min_length=20, max_length=5000)
    priority: GrievancePriority = GrievancePriority.MEDIUM


class GrievanceRespondRequest(BaseSchema):
    status: GrievanceStatus
    response: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("status")
    @classmethod
    def validate_target(cls, v: GrievanceStatus) -> GrievanceStatus:
        if v == GrievanceStatus.OPEN:
            raise ValueError("status must be in_progress, resolved or closed")
        return v


class GrievanceResponse(BaseDBSchema):
    category: GrievanceCategory
    description: str
    status: GrievanceStatus
    priority: GrievancePriority
    user: UserSummary
    response: Optional[str] = None
    responded_by: Optional[UserSummary] = None
    responded_at: Optional[datetime] = None
    file_url: Optional[str] = None
    file_object_key: Optional[str] = None


class GrievanceListData(BaseSchema):
    grievances: List[GrievanceResponse]
    count: int
