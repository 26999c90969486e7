"""
Self-registration schema.
"""

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseSchema

__all__ = ["RegisterRequest"]


class RegisterRequest(BaseSchema):
    """Self-registration; the account is created with the employee role."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()
