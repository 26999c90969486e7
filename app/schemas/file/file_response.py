"""
File metadata and access schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from app.models.base.enums import RelatedEntityType
from app.schemas.common.base import BaseDBSchema, BaseSchema

__all__ = ["FileMetaResponse", "FileListData", "FileAccessData", "FileAccessMeta"]


class FileMetaResponse(BaseDBSchema):
    file_name: str
    original_name: str
    mime_type: str
    size: int
    object_key: str
    related_entity_type: RelatedEntityType
    related_entity_id: Optional[str] = None


class FileListData(BaseSchema):
    files: List[FileMetaResponse]
    count: int


class FileAccessMeta(BaseSchema):
    file_name: str
    mime_type: str
    size: int
    uploaded_at: datetime


class FileAccessData(BaseSchema):
    """Short-lived signed download URL for one object."""

    url: str
    expires_in_seconds: int
    file_meta: FileAccessMeta
