"""
Leave application database model.

A leave moves from pending to approved or rejected exactly once and is
immutable afterwards.
"""

from datetime import date as Date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    Date as SQLDate,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import LeaveStatus, LeaveType

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = ["LeaveApplication"]


class LeaveApplication(TimestampModel):
    """
    Core leave application entity.

    For one user no two non-rejected applications may overlap; the check is
    done by the leave service while holding a lock on the user row.
    """

    __tablename__ = "leave_applications"
    __table_args__ = (
        # Ensure end date is after or equal to start date
        CheckConstraint(
            "to_date >= from_date",
            name="ck_leave_application_date_order"
        ),
        Index("ix_leave_application_status", "status"),
        # Overlap lookups
        Index(
            "ix_leave_application_user_status_dates",
            "user_id",
            "status",
            "from_date",
            "to_date"
        ),
        {"comment": "Leave applications and their decisions"}
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Employee requesting leave"
    )
    leave_type: Mapped[LeaveType] = mapped_column(
        enum_type(LeaveType, "leave_type"),
        nullable=False,
    )
    from_date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        comment="Leave start date (inclusive)"
    )
    to_date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        comment="Leave end date (inclusive)"
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[LeaveStatus] = mapped_column(
        enum_type(LeaveStatus, "leave_status"),
        nullable=False,
        default=LeaveStatus.PENDING,
    )

    # Decision
    approved_by_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="Who approved or rejected the leave"
    )
    approver_remarks: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id], lazy="joined")
    approved_by: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[approved_by_id], lazy="joined"
    )

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING
