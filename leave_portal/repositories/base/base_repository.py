"""
Base repository with standardized CRUD operations, transaction management, and error handling.

Provides foundation for all domain repositories.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from leave_portal.config.logging import get_logger
from leave_portal.core.exceptions import RepositoryError
from leave_portal.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Every SQLAlchemy failure is rolled back and re-raised as
    RepositoryError so callers handle a single exception type.
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
                repository.create(entity, commit=False)
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Transaction rollback: {str(e)}", exc_info=True)
            raise RepositoryError(f"Transaction failed: {str(e)}") from e

    def commit(self):
        """Commit current transaction."""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Commit failed: {str(e)}") from e

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Raises:
            RepositoryError: If the insert fails
        """
        try:
            self.db.add(entity)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except IntegrityError as e:
            self.db.rollback()
            raise RepositoryError(
                f"{self.model.__name__} violates a constraint",
                details={"error": str(e.orig)},
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Create failed: {str(e)}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: Any) -> Optional[ModelType]:
        """
        Find entity by ID.

        Returns:
            Entity or None
        """
        try:
            return self.db.query(self.model).filter(self.model.id == str(id)).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Find by ID failed: {str(e)}") from e

    def count(self) -> int:
        """Count all rows of the model's table."""
        try:
            return self.db.query(self.model).count()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Count failed: {str(e)}") from e

    # ==================== Update Operations ====================

    def update(self, id: Any, data: Dict[str, Any], commit: bool = True) -> Optional[ModelType]:
        """
        Update entity fields.

        Returns:
            Updated entity, or None if no row has this id
        """
        try:
            entity = self.find_by_id(id)
            if entity is None:
                return None

            for key, value in data.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.info(f"Updated {self.model.__name__} with id: {id}")
            return entity

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Update failed: {str(e)}") from e

    # ==================== Delete Operations ====================

    def delete(self, id: Any, commit: bool = True) -> bool:
        """
        Hard delete entity.

        Returns:
            True if deleted, False if not found
        """
        try:
            entity = self.find_by_id(id)
            if not entity:
                return False

            self.db.delete(entity)

            if commit:
                self.db.commit()
            else:
                self.db.flush()

            logger.info(f"Deleted {self.model.__name__} with id: {id}")
            return True

        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Delete failed: {str(e)}") from e
