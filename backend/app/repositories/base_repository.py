# backend/app/repositories/base_repository.py
"""
Base Repository Pattern for the EventHub booking API

Provides the foundation for all repository classes with:
- Common lookup/create/update operations
- Type safety with generics
- Transaction support (managed by services)
- Query builder helpers

The repository pattern separates data access from business logic,
making the code more testable and maintainable.
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException

# Type variable for generic model support
T = TypeVar("T")

logger = logging.getLogger(__name__)


class IRepository(ABC, Generic[T]):
    """
    Abstract repository interface defining core data access methods.

    All repositories must implement these methods to ensure consistency
    across the application.
    """

    @abstractmethod
    def get_by_id(
        self, id: int, load_relationships: bool = True, for_update: bool = False
    ) -> Optional[T]:
        """
        Retrieve an entity by its primary key.

        Args:
            id: The primary key value
            load_relationships: Whether to eager load relationships
            for_update: Whether to lock the row until the transaction ends

        Returns:
            The entity if found, None otherwise
        """

    @abstractmethod
    def create(self, **kwargs) -> T:
        """
        Create a new entity.

        Raises:
            RepositoryException: If creation fails
        """

    @abstractmethod
    def update(self, id: int, **kwargs) -> Optional[T]:
        """
        Update an existing entity.

        Returns:
            The updated entity if found, None otherwise

        Raises:
            RepositoryException: If update fails
        """

    @abstractmethod
    def find_one_by(self, **kwargs) -> Optional[T]:
        """
        Find the first entity (lowest id) matching exact criteria.

        Returns:
            First matching entity or None
        """


class BaseRepository(IRepository[T]):
    """
    Concrete base repository implementation with common data access patterns.

    Repositories never commit and never raise domain errors: a missing row is
    returned as None and interpreted by the calling service.

    Attributes:
        db: SQLAlchemy session
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model.

        Args:
            db: SQLAlchemy session (managed by service layer)
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def get_by_id(
        self, id: int, load_relationships: bool = True, for_update: bool = False
    ) -> Optional[T]:
        """
        Retrieve an entity by its primary key.

        Implements eager loading for relationships when requested. With
        ``for_update`` the row stays locked (SELECT ... FOR UPDATE) until the
        surrounding transaction commits or rolls back.
        """
        try:
            query = self.db.query(self.model).filter(self.model.id == id)

            # Optionally eager load relationships
            if load_relationships:
                query = self._apply_eager_loading(query)
            if for_update:
                query = query.with_for_update()

            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve {self.model.__name__}: {str(e)}")

    def create(self, **kwargs) -> T:
        """
        Create a new entity.

        Note: Does NOT commit - transaction management is handled by service layer.
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()  # Get ID without committing
            return entity
        except IntegrityError as exc:
            self.logger.error(
                "Integrity error creating %s: %s", self.model.__name__, exc, exc_info=True
            )
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}")

    def update(self, id: int, **kwargs) -> Optional[T]:
        """
        Update an existing entity.

        Only updates provided fields, preserves others.
        """
        try:
            entity = self.get_by_id(id, load_relationships=False)
            if not entity:
                return None

            # Update only provided fields
            for key, value in kwargs.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)

            self.db.flush()
            return entity
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to update {self.model.__name__}: {str(e)}")

    def find_one_by(self, **kwargs) -> Optional[T]:
        """
        Find a single entity by given criteria.

        Args:
            **kwargs: Filter criteria (exact match)

        Returns:
            First matching entity (lowest id) or None
        """
        try:
            return (
                self.db.query(self.model).filter_by(**kwargs).order_by(self.model.id.asc()).first()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding one by criteria: {str(e)}")
            raise RepositoryException(f"Failed to find record: {str(e)}")

    # Protected helper methods for use by subclasses

    def _apply_eager_loading(self, query: Query) -> Query:
        """
        Apply eager loading to relationships.

        Override in subclasses to specify which relationships to load.
        """
        return query

    def _describe(self, **context: Any) -> str:
        parts = ", ".join(f"{key}={value}" for key, value in context.items())
        return f"{self.model.__name__}({parts})"
