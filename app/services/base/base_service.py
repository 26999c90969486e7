"""
Base service class providing common functionality for all services.
"""

from typing import TypeVar, Generic, Optional, Dict, Any
from abc import ABC
from contextlib import contextmanager

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import EntityAlreadyExistsError, RepositoryError, StorageError
from app.core.logging import get_logger
from app.repositories.base.base_repository import BaseRepository
from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)


TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    """

    #: Human readable name used in not-found messages
    resource_name: str = "Resource"

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(f"app.services.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert exception to a ServiceResult failure with logging.

        Conflicts and storage failures are expected outcomes and are logged
        at WARNING; anything else is unexpected and logged with traceback.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            additional_context: Extra context for logging/debugging

        Returns:
            ServiceResult with failure status and error details
        """
        error_code = self._map_exception_to_error_code(exception)
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        if error_code == ErrorCode.CONFLICT:
            self._logger.warning(f"Conflict during {operation}: {exception}", extra=context)
            return ServiceResult.conflict(f"Failed to {operation}: conflicting record exists")

        if error_code == ErrorCode.EXTERNAL_SERVICE_ERROR:
            self._logger.error(f"Storage failure during {operation}: {exception}", extra=context)
            return ServiceResult.external_failure(f"Failed to {operation}: {exception}")

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )
        return ServiceResult.failure(
            ServiceError(
                code=error_code,
                message=f"Failed to {operation}",
                details={"entity_ref": context["entity_ref"]},
                severity=ErrorSeverity.CRITICAL,
            )
        )

    def _map_exception_to_error_code(self, exception: Exception) -> ErrorCode:
        """
        Map exception types to appropriate error codes.

        Args:
            exception: The exception to map

        Returns:
            Appropriate ErrorCode for the exception
        """
        exception_mapping = (
            (EntityAlreadyExistsError, ErrorCode.CONFLICT),
            (IntegrityError, ErrorCode.CONFLICT),
            (StorageError, ErrorCode.EXTERNAL_SERVICE_ERROR),
            (ValueError, ErrorCode.VALIDATION_ERROR),
            (PermissionError, ErrorCode.FORBIDDEN),
            (RepositoryError, ErrorCode.INTERNAL_ERROR),
            (SQLAlchemyError, ErrorCode.INTERNAL_ERROR),
        )

        for exc_type, error_code in exception_mapping:
            if isinstance(exception, exc_type):
                return error_code

        return ErrorCode.INTERNAL_ERROR

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True):
        """
        Context manager for database transactions with automatic rollback.

        Args:
            auto_commit: Whether to commit automatically on success

        Yields:
            The database session

        Example:
            with self.transaction():
                self.repository.create(entity)
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            if auto_commit:
                self._commit()
        except Exception as e:
            self._rollback()
            self._logger.debug(f"Transaction rolled back: {type(e).__name__}")
            raise

    def _commit(self) -> None:
        """Commit the current transaction."""
        self.db.commit()
        self._logger.debug("Transaction committed successfully")

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Common Operations
    # -------------------------------------------------------------------------

    def get_by_id(self, entity_id: str) -> ServiceResult[TModel]:
        """
        Retrieve entity by ID.

        Args:
            entity_id: Id of the entity

        Returns:
            ServiceResult containing the entity or a NOT_FOUND error
        """
        try:
            entity = self.repository.find_by_id(entity_id)
        except RepositoryError as e:
            return self._handle_exception(e, f"get {self.resource_name.lower()}", entity_id)
        if entity is None:
            return ServiceResult.not_found(self.resource_name, entity_id)
        return ServiceResult.success(entity)
