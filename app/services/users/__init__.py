"""
User-facing services.

- UserService:
    Admin provisioning of user accounts.
"""

from .user_service import UserService

__all__ = ["UserService"]
