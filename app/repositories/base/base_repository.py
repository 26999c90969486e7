"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit: the calling service owns the transaction
boundary (see ``BaseService.transaction``), so several repository calls
can be made atomic together.
"""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.core.exceptions import EntityAlreadyExistsError, RepositoryError
from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides create/read/delete primitives shared by all domain
    repositories. Domain repositories add typed query builders.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add a new entity and flush it so defaults and ids are populated.

        Raises:
            EntityAlreadyExistsError: If a unique constraint rejects the row
            RepositoryError: On any other database failure
        """
        try:
            self.db.add(entity)
            self.db.flush()
            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity
        except IntegrityError as e:
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} already exists"
            ) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, str(id))
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def find_by_id_for_update(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID and lock its row until the transaction ends.

        Backends without row locks (SQLite) ignore ``FOR UPDATE``; there the
        database-level write lock serializes writers instead.
        """
        stmt = (
            select(self.model)
            .where(self.model.id == str(id))
            .with_for_update(of=self.model)
        )
        return self._scalar(stmt)

    def fetch_all(self, stmt: Select, limit: Optional[int] = None) -> List[ModelType]:
        """Execute a select over this model and return the entities."""
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return list(self.db.scalars(stmt).unique().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Query failed: {str(e)}") from e

    def _scalar(self, stmt: Select) -> Optional[ModelType]:
        try:
            return self.db.scalars(stmt).unique().first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Query failed: {str(e)}") from e

    # ==================== Update Operations ====================

    def flush(self) -> None:
        """
        Flush pending changes on tracked entities.

        Raises:
            EntityAlreadyExistsError: If a unique constraint rejects the change
        """
        try:
            self.db.flush()
        except IntegrityError as e:
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} conflicts with an existing record"
            ) from e
        except SQLAlchemyError as e:
            raise RepositoryError(f"Update failed: {str(e)}") from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        """Delete an entity."""
        try:
            self.db.delete(entity)
            self.db.flush()
            logger.debug(f"Deleted {self.model.__name__} with id: {entity.id}")
        except SQLAlchemyError as e:
            raise RepositoryError(f"Delete failed: {str(e)}") from e
