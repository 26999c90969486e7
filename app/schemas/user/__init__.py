"""User schemas."""
from app.schemas.user.user import UserCreateRequest, UserResponse, UserSummary

__all__ = ["UserCreateRequest", "UserResponse", "UserSummary"]
