"""
Grievance model.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, case
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import GrievanceCategory, GrievancePriority, GrievanceStatus

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = ["Grievance", "priority_rank"]


class Grievance(TimestampModel):
    """
    Complaint raised by an employee and answered by HR.

    Status moves freely among open, in_progress and resolved; closed is
    terminal.
    """

    __tablename__ = "grievances"
    __table_args__ = (
        Index("ix_grievance_status_priority_created", "status", "priority", "created_at"),
        {"comment": "Employee grievances"}
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category: Mapped[GrievanceCategory] = mapped_column(
        enum_type(GrievanceCategory, "grievance_category"),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[GrievanceStatus] = mapped_column(
        enum_type(GrievanceStatus, "grievance_status"),
        nullable=False,
        default=GrievanceStatus.OPEN,
    )
    priority: Mapped[GrievancePriority] = mapped_column(
        enum_type(GrievancePriority, "grievance_priority"),
        nullable=False,
        default=GrievancePriority.MEDIUM,
    )

    # Response
    response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    responded_by_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    responded_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Attachment
    file_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    file_object_key: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id], lazy="joined")
    responded_by: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[responded_by_id], lazy="joined"
    )

    @property
    def is_closed(self) -> bool:
        return self.status == GrievanceStatus.CLOSED


def priority_rank():
    """SQL expression ranking priority low=0 .. urgent=3."""
    return case(
        {priority: priority.rank for priority in GrievancePriority},
        value=Grievance.priority,
        else_=0,
    )
