"""
Department transfer request model.
"""

from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import TransferStatus

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = ["TransferRequest"]


class TransferRequest(TimestampModel):
    """
    Request by an employee to move to another department.

    ``current_department`` is a snapshot taken when the request is created.
    Approval overwrites the user's department in the same transaction.
    """

    __tablename__ = "transfer_requests"
    __table_args__ = (
        Index("ix_transfer_request_status_created", "status", "created_at"),
        # At most one pending request per user
        Index(
            "uq_transfer_request_one_pending_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        {"comment": "Inter-department transfer requests"}
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    current_department: Mapped[str] = mapped_column(String(100), nullable=False)
    requested_department: Mapped[str] = mapped_column(String(100), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TransferStatus] = mapped_column(
        enum_type(TransferStatus, "transfer_status"),
        nullable=False,
        default=TransferStatus.PENDING,
    )

    approved_by_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    approver_remarks: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    effective_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    user: Mapped["User"] = relationship("User", foreign_keys=[user_id], lazy="joined")
    approved_by: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[approved_by_id], lazy="joined"
    )

    @property
    def is_pending(self) -> bool:
        return self.status == TransferStatus.PENDING
