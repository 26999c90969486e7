"""Authentication schemas."""
from app.schemas.auth.login import LoginRequest
from app.schemas.auth.register import RegisterRequest
from app.schemas.auth.token import AuthResponse, RefreshTokenRequest, TokenResponse

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "RefreshTokenRequest",
    "TokenResponse",
    "AuthResponse",
]
