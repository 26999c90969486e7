"""
Task schemas.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, model_validator

from app.schemas.common.base import BaseDBSchema, BaseSchema
from app.schemas.user.user import UserSummary

__all__ = ["TaskCreate", "TaskUpdate", "TaskResponse", "TaskListData"]


class TaskCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)


class TaskUpdate(BaseSchema):
    """Partial update; at least one field must be supplied."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def require_a_field(self) -> "TaskUpdate":
        if self.title is None and self.description is None:
            raise ValueError("At least one field (title or description) is required")
        return self


class TaskResponse(BaseDBSchema):
    title: str
    description: str
    owner: UserSummary


class TaskListData(BaseSchema):
    tasks: List[TaskResponse]
    count: int
