"""
File Metadata Model

Describes an object held in the object store and what it is attached to.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import RelatedEntityType

if TYPE_CHECKING:
    from app.models.user.user import User

__all__ = ["FileMeta"]


class FileMeta(TimestampModel):
    """
    Metadata for one uploaded object.

    ``object_key`` is the stable name of the object in the store and is the
    handle clients use to request a signed download URL.
    """

    __tablename__ = "file_metadata"
    __table_args__ = (
        Index("ix_file_metadata_object_key", "object_key", unique=True),
        Index("ix_file_metadata_related", "related_entity_type", "related_entity_id"),
        Index("ix_file_metadata_uploader_created", "uploaded_by_id", "created_at"),
    )

    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False, comment="Size in bytes")
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    object_key: Mapped[str] = mapped_column(String(255), nullable=False)

    uploaded_by_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    related_entity_type: Mapped[RelatedEntityType] = mapped_column(
        enum_type(RelatedEntityType, "related_entity_type"),
        nullable=False,
    )
    related_entity_id: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)

    uploaded_by: Mapped["User"] = relationship("User", lazy="joined")
