"""
Grievance service.

Handles:
- Filing a grievance, optionally with one attachment
- Responding (HR/admin) with status changes until closed
- Listing own grievances and the priority-ordered queue
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError, StorageError
from app.core.security.permissions import Action, Actor, can_access, has_capability
from app.models.base.base_model import utcnow
from app.models.base.enums import (
    GrievanceCategory,
    GrievancePriority,
    GrievanceStatus,
    RelatedEntityType,
)
from app.models.file_management.file_metadata import FileMeta
from app.models.grievance.grievance import Grievance
from app.repositories.file_management import FileMetadataRepository
from app.repositories.grievance import GrievanceFilter, GrievanceRepository
from app.schemas.grievance import GrievanceCreate, GrievanceRespondRequest
from app.services.base import BaseService, ServiceResult
from app.services.file_management.object_storage import ObjectStore
from app.services.file_management.upload import (
    UploadedFile,
    generate_object_key,
    validate_upload,
)

logger = logging.getLogger(__name__)


class GrievanceService(BaseService[Grievance, GrievanceRepository]):
    """
    Grievance lifecycle.

    An attachment is stored before the grievance row is written. If the
    store fails, nothing is created. If the database write fails after the
    object was stored, the object is deleted again.
    """

    resource_name = "Grievance"

    def __init__(
        self,
        repository: GrievanceRepository,
        file_repository: FileMetadataRepository,
        db_session: Session,
        object_store: ObjectStore,
        allowed_mime_types: Iterable[str],
        max_upload_size: int,
    ):
        """
        Initialize grievance service.

        Args:
            repository: GrievanceRepository instance
            file_repository: Repository for attachment metadata
            db_session: SQLAlchemy database session
            object_store: Store receiving attachment bytes
            allowed_mime_types: Accepted attachment content types
            max_upload_size: Maximum attachment size in bytes
        """
        super().__init__(repository, db_session)
        self.files = file_repository
        self.store = object_store
        self.allowed_mime_types = frozenset(allowed_mime_types)
        self.max_upload_size = max_upload_size

    # =========================================================================
    # Create
    # =========================================================================

    def create(
        self,
        actor: Actor,
        request: GrievanceCreate,
        upload: Optional[UploadedFile] = None,
    ) -> ServiceResult[Grievance]:
        """
        File a grievance.

        Args:
            actor: Employee raising the grievance
            request: Category, description and priority
            upload: Optional attachment

        Returns:
            ServiceResult with the grievance; VALIDATION_ERROR for a rejected
            attachment, EXTERNAL_SERVICE_ERROR when the store fails
        """
        object_key = None
        file_url = None

        if upload is not None:
            problem = validate_upload(upload, self.allowed_mime_types, self.max_upload_size)
            if problem:
                return ServiceResult.validation_failure(problem, field="file")

            object_key = generate_object_key(upload)
            try:
                file_url = self.store.put(object_key, upload.data, upload.content_type)
            except StorageError as e:
                return self._handle_exception(
                    e, "upload file", actor.id, {"object_key": object_key}
                )

        grievance = Grievance(
            user_id=actor.id,
            category=request.category,
            description=request.description,
            priority=request.priority,
            status=GrievanceStatus.OPEN,
            file_url=file_url,
            file_object_key=object_key,
        )
        try:
            with self.transaction():
                self.repository.create(grievance)
                if upload is not None:
                    self.files.create(
                        FileMeta(
                            file_name=object_key,
                            original_name=upload.filename,
                            mime_type=upload.content_type,
                            size=upload.size,
                            url=file_url,
                            object_key=object_key,
                            uploaded_by_id=actor.id,
                            related_entity_type=RelatedEntityType.GRIEVANCE,
                            related_entity_id=grievance.id,
                        )
                    )
        except RepositoryError as e:
            if object_key is not None:
                self._discard_object(object_key)
            return self._handle_exception(e, "create grievance", actor.id)

        logger.info(
            "Grievance created",
            extra={
                "grievance_id": grievance.id,
                "user_id": actor.id,
                "priority": grievance.priority.value,
                "has_attachment": object_key is not None,
            },
        )
        return ServiceResult.success(grievance, message="Grievance submitted successfully")

    def _discard_object(self, object_key: str) -> None:
        try:
            self.store.delete(object_key)
        except StorageError as e:
            logger.error(f"Orphaned object {object_key} could not be deleted: {e}")

    # =========================================================================
    # Respond
    # =========================================================================

    def respond(
        self,
        actor: Actor,
        grievance_id: str,
        request: GrievanceRespondRequest,
    ) -> ServiceResult[Grievance]:
        """
        Move a grievance to in_progress, resolved or closed.

        Closed is terminal: any response to a closed grievance is a CONFLICT,
        whatever the requested status.
        """
        try:
            with self.transaction():
                grievance = self.repository.find_by_id_for_update(grievance_id)
                if grievance is None:
                    return ServiceResult.not_found(self.resource_name, grievance_id)

                if grievance.is_closed:
                    return ServiceResult.conflict("This grievance is already closed")

                if not can_access(actor, Action.RESPOND_GRIEVANCE, owner_id=grievance.user_id):
                    logger.warning(
                        "Grievance response denied",
                        extra={"grievance_id": grievance_id, "actor_id": actor.id},
                    )
                    return ServiceResult.forbidden("Not authorized to respond to this grievance")

                grievance.status = request.status
                if request.response is not None:
                    grievance.response = request.response
                grievance.responded_by_id = actor.id
                grievance.responded_at = utcnow()
                self.repository.flush()
                self.db.refresh(grievance)
        except RepositoryError as e:
            return self._handle_exception(e, "respond to grievance", grievance_id)

        logger.info(
            "Grievance updated",
            extra={
                "grievance_id": grievance_id,
                "status": grievance.status.value,
                "responded_by": actor.id,
            },
        )
        return ServiceResult.success(grievance, message="Grievance updated successfully")

    # =========================================================================
    # Listing
    # =========================================================================

    def list_mine(
        self,
        actor: Actor,
        status: Optional[GrievanceStatus] = None,
        limit: int = 20,
    ) -> ServiceResult[List[Grievance]]:
        try:
            grievances = self.repository.list_grievances(
                GrievanceFilter(user_id=actor.id, status=status, limit=limit)
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list grievances", actor.id)
        return ServiceResult.success(grievances)

    def list_all(
        self,
        actor: Actor,
        status: Optional[GrievanceStatus] = None,
        category: Optional[GrievanceCategory] = None,
        priority: Optional[GrievancePriority] = None,
        limit: int = 50,
    ) -> ServiceResult[List[Grievance]]:
        """Grievance queue, most urgent first and newest first within a priority."""
        if not has_capability(actor, Action.LIST_GRIEVANCES):
            return ServiceResult.forbidden("Not authorized to list grievances")

        try:
            grievances = self.repository.list_grievances(
                GrievanceFilter(
                    status=status,
                    category=category,
                    priority=priority,
                    by_priority=True,
                    limit=limit,
                )
            )
        except RepositoryError as e:
            return self._handle_exception(e, "list grievances")
        return ServiceResult.success(grievances)
