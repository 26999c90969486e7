"""
Token request/response schemas.
"""

from pydantic import Field

from app.schemas.common.base import BaseSchema
from app.schemas.user.user import UserResponse

__all__ = ["RefreshTokenRequest", "TokenResponse", "AuthResponse"]


class RefreshTokenRequest(BaseSchema):
    refresh_token: str = Field(..., min_length=1, description="Refresh token to rotate")


class TokenResponse(BaseSchema):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(TokenResponse):
    """Token pair plus the authenticated user."""

    user: UserResponse
