"""
Attendance record model.

One record per user per calendar day; the date column carries no
time-of-day component.
"""

from datetime import date as Date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date as SQLDate, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type, utcnow
from app.models.base.enums import AttendanceStatus

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = ["AttendanceRecord"]


class AttendanceRecord(TimestampModel):
    """Daily attendance mark for one user."""

    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
        Index("ix_attendance_date", "date"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    status: Mapped[AttendanceStatus] = mapped_column(
        enum_type(AttendanceStatus, "attendance_status"),
        nullable=False,
    )
    remarks: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When the mark was recorded"
    )

    user: Mapped["User"] = relationship("User", lazy="joined")
