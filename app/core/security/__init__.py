"""Security module for authentication and authorization."""

from .password_hasher import PasswordHasher
from .jwt_handler import JWTManager, ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE
from .permissions import Action, Actor, Scope, can_access, has_capability

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "Action",
    "Actor",
    "Scope",
    "can_access",
    "has_capability",
]
