"""
File access service: listing uploads and issuing signed download URLs.
"""

import logging
from dataclasses import dataclass
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError, StorageError
from app.core.security.permissions import Action, Actor, can_access
from app.models.file_management.file_metadata import FileMeta
from app.repositories.file_management import FileMetadataRepository
from app.services.base import BaseService, ErrorCode, ErrorSeverity, ServiceError, ServiceResult
from app.services.file_management.object_storage import ObjectStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileAccess:
    """Signed URL for one object together with its metadata."""

    url: str
    expires_in_seconds: int
    file: FileMeta


class FileService(BaseService[FileMeta, FileMetadataRepository]):
    """
    Read access to stored attachments.

    Objects are never served directly; callers receive a short-lived
    signed URL after the metadata and permission checks pass.
    """

    resource_name = "File"

    def __init__(
        self,
        repository: FileMetadataRepository,
        db_session: Session,
        object_store: ObjectStore,
        url_expiry_seconds: int = 600,
    ):
        super().__init__(repository, db_session)
        self.store = object_store
        self.url_expiry_seconds = url_expiry_seconds

    def list_mine(self, actor: Actor, limit: int = 20) -> ServiceResult[List[FileMeta]]:
        try:
            files = self.repository.list_by_uploader(actor.id, limit=limit)
        except RepositoryError as e:
            return self._handle_exception(e, "list files", actor.id)
        return ServiceResult.success(files)

    def get_access(self, actor: Actor, object_key: str) -> ServiceResult[FileAccess]:
        """
        Issue a signed URL for ``object_key``.

        Returns:
            ServiceResult with the URL; NOT_FOUND when no metadata exists or
            the object is missing from the store, FORBIDDEN unless the caller
            uploaded the file or holds a file-reading role
        """
        try:
            meta = self.repository.find_by_object_key(object_key)
        except RepositoryError as e:
            return self._handle_exception(e, "get file", object_key)
        if meta is None:
            return ServiceResult.not_found(self.resource_name, object_key)

        if not can_access(actor, Action.READ_FILE, owner_id=meta.uploaded_by_id):
            logger.warning(
                "File access denied",
                extra={"object_key": object_key, "actor_id": actor.id},
            )
            return ServiceResult.forbidden("Not authorized to access this file")

        try:
            if not self.store.exists(object_key):
                logger.error(f"Metadata present but object missing: {object_key}")
                return ServiceResult.failure(
                    ServiceError(
                        code=ErrorCode.NOT_FOUND,
                        message="File not found in storage",
                        severity=ErrorSeverity.ERROR,
                        details={"object_key": object_key},
                    )
                )
            url = self.store.signed_url(object_key, self.url_expiry_seconds)
        except StorageError as e:
            return self._handle_exception(e, "generate file URL", object_key)

        logger.info("File URL issued", extra={"object_key": object_key, "actor_id": actor.id})
        return ServiceResult.success(
            FileAccess(url=url, expires_in_seconds=self.url_expiry_seconds, file=meta)
        )
