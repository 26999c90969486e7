"""
User schemas.

``UserResponse`` is the safe projection: it never carries the password
digest or the refresh token digest.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.base.enums import UserRole
from app.schemas.common.base import BaseSchema

__all__ = ["UserSummary", "UserResponse", "UserCreateRequest"]


class UserSummary(BaseSchema):
    """Compact user reference embedded in other resources."""

    id: str
    name: str
    email: str
    employee_id: Optional[str] = None
    department: Optional[str] = None


class UserResponse(BaseSchema):
    """Safe user projection."""

    id: str
    name: str
    email: str
    role: UserRole
    employee_id: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
    date_of_joining: Optional[date] = None
    created_at: datetime


class UserCreateRequest(BaseSchema):
    """Admin-provisioned account with explicit role and placement."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    role: UserRole = UserRole.EMPLOYEE
    employee_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    department: Optional[str] = Field(default=None, min_length=1, max_length=100)
    designation: Optional[str] = Field(default=None, max_length=100)
    date_of_joining: Optional[date] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()
