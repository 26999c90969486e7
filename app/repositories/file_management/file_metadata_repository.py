"""
File metadata repository.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.file_management.file_metadata import FileMeta
from app.repositories.base.base_repository import BaseRepository


class FileMetadataRepository(BaseRepository[FileMeta]):
    """Repository for uploaded file metadata."""

    def __init__(self, session: Session):
        super().__init__(FileMeta, session)

    def find_by_object_key(self, object_key: str) -> Optional[FileMeta]:
        return self._scalar(select(FileMeta).where(FileMeta.object_key == object_key))

    def list_by_uploader(self, user_id: str, limit: Optional[int] = None) -> List[FileMeta]:
        stmt = (
            select(FileMeta)
            .where(FileMeta.uploaded_by_id == user_id)
            .order_by(FileMeta.created_at.desc())
        )
        return self.fetch_all(stmt, limit=limit)
