"""
User model configuration.
"""
from datetime import date
from typing import Optional

from sqlalchemy import Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import UserRole


class User(TimestampModel):
    """
    Core User entity.

    Owns identity, role, department and credentials. The refresh token
    column holds the SHA-256 digest of the single refresh token currently
    valid for the user, or NULL when signed out.
    """
    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_email", "email", unique=True),
        Index("ix_users_employee_id", "employee_id", unique=True),
        Index("ix_users_department", "department"),
        {"comment": "Staff identity, role and credentials"}
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name"
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Unique email address (normalized to lowercase)"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )
    role: Mapped[UserRole] = mapped_column(
        enum_type(UserRole, "user_role"),
        nullable=False,
        default=UserRole.EMPLOYEE,
        comment="Role used by the authorization policy"
    )
    employee_id: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Unique staff number when assigned"
    )
    department: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Current department"
    )
    designation: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    date_of_joining: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )
    refresh_token_hash: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        comment="SHA-256 digest of the active refresh token"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
