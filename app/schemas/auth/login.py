"""
Login request schema.
"""

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseSchema

__all__ = ["LoginRequest"]


class LoginRequest(BaseSchema):
    """Email/password login."""

    email: EmailStr = Field(..., description="Registered email address")
    password: str = Field(..., min_length=1, description="Account password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()
