"""Core application modules."""

from .security import PasswordHasher, JWTManager

__all__ = ["PasswordHasher", "JWTManager"]