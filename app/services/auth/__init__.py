"""
Authentication services: token lifecycle and credential flows.
"""

from .token_service import TokenPair, TokenService, hash_refresh_token
from .auth_service import AuthService, AuthSession

__all__ = [
    "TokenPair",
    "TokenService",
    "hash_refresh_token",
    "AuthService",
    "AuthSession",
]
