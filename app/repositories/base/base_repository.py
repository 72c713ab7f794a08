"""
Base repository with standardized CRUD operations, transaction management, and error handling.

Provides the foundation for all domain repositories; every SQLAlchemy
failure leaves this layer as a RepositoryError.
"""

from contextlib import contextmanager
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import EntityAlreadyExistsError, NotFoundError, RepositoryError
from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository for one model class.

    Writes only flush; committing is the caller's decision so that a
    service can group several repository calls in one transaction.
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

    # ==================== Transaction Management ====================

    @contextmanager
    def transaction(self):
        """
        Transaction context manager with automatic rollback.

        Usage:
            with repository.transaction():
                repository.create(entity)
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction rollback: {e}", exc_info=True)
            raise RepositoryError(f"Transaction failed: {e}") from e
        except Exception:
            self.db.rollback()
            raise

    def commit(self) -> None:
        """Commit current transaction."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EntityAlreadyExistsError(
                f"{self.model.__name__} violates a unique constraint"
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Commit failed: {e}") from e

    def rollback(self) -> None:
        """Rollback current transaction."""
        self.db.rollback()

    # ==================== Create Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush it so generated ids are available."""
        try:
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError as e:
            self.db.rollback()
            raise EntityAlreadyExistsError(f"{self.model.__name__} already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Create failed: {e}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, entity_id: Any) -> Optional[ModelType]:
        """Return the entity or None."""
        if entity_id is None:
            return None
        try:
            return self.db.get(self.model, entity_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by id failed: {e}") from e

    def get_by_id(self, entity_id: Any) -> ModelType:
        """
        Return the entity or raise.

        Raises:
            NotFoundError: If no row has this id
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self.model.__name__, entity_id)
        return entity

    def find_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        try:
            query = select(self.model).offset(skip).limit(limit)
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find all failed: {e}") from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        """Delete through the ORM so relationship cascades apply."""
        try:
            self.db.delete(entity)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Delete failed: {e}") from e
