"""
User repository.

Besides lookups, owns the compare-and-swap update used to rotate the
stored refresh token digest.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.user.user import User
from app.repositories.base.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user identity and credential state."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self._scalar(stmt)

    def find_by_employee_id(self, employee_id: str) -> Optional[User]:
        stmt = select(User).where(User.employee_id == employee_id)
        return self._scalar(stmt)

    def set_refresh_token_hash(self, user_id: str, token_hash: Optional[str]) -> bool:
        """
        Unconditionally overwrite the stored refresh token digest.

        Returns:
            True if the user exists
        """
        result = self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token_hash=token_hash)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def swap_refresh_token_hash(self, user_id: str, expected_hash: str, new_hash: str) -> bool:
        """
        Replace the stored digest only if it still equals ``expected_hash``.

        The check and the write are one UPDATE statement, so of two requests
        presenting the same refresh token at most one can succeed.

        Returns:
            True if exactly one row was swapped
        """
        result = self.db.execute(
            update(User)
            .where(User.id == user_id, User.refresh_token_hash == expected_hash)
            .values(refresh_token_hash=new_hash)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
