"""Base repository implementation for the URL shortener application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union
import logging

from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


def is_unique_violation(error: IntegrityError) -> bool:
    """
    Tell whether an IntegrityError comes from a unique constraint.

    Drivers that expose a SQLSTATE (asyncpg, psycopg) are checked by code;
    others (sqlite) by their error text.
    """
    orig = getattr(error, "orig", None)
    for attr in ("sqlstate", "pgcode"):
        code = getattr(orig, attr, None)
        if code:
            return code == UNIQUE_VIOLATION_SQLSTATE
    message = str(orig if orig is not None else error).lower()
    return "unique" in message or "duplicate key" in message


class BaseRepository(Generic[T, CreateSchemaType]):
    """
    Base repository implementing common operations for SQLModel entities.

    The repository is bound to one session at construction; the session's
    lifecycle belongs to the caller.

    Type parameters:
        T: The SQLModel type this repository manages
        CreateSchemaType: The Pydantic model type for creation operations
    """

    def __init__(self, db: AsyncSession, model_type: Type[T]):
        """
        Initialize the repository.

        Args:
            db: Database session used for every operation
            model_type: The SQLModel class this repository will work with
        """
        self.db = db
        self.model_type = model_type

    async def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get an entity by its ID.

        Args:
            id: Entity ID

        Returns:
            The entity if found, None otherwise
        """
        try:
            return await self.db.get(self.model_type, id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} with id {id}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e

    async def create(self, data: Union[CreateSchemaType, Dict[str, Any]]) -> T:
        """
        Create a new entity.

        Args:
            data: Entity data (either as a Pydantic model or dictionary)

        Returns:
            The created entity

        Raises:
            IntegrityError: On constraint violations, after rolling back, so
                subclasses can classify them
            RepositoryError: On other database errors
        """
        if isinstance(data, BaseModel):
            data_dict = data.model_dump(exclude_unset=True)
        else:
            data_dict = data

        entity = self.model_type(**data_dict)
        try:
            self.db.add(entity)
            await self.db.flush()  # Flush to generate ID but don't commit yet

            # Refresh to get any default values or generated columns
            await self.db.refresh(entity)
            return entity
        except IntegrityError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            await self.db.rollback()
            raise RepositoryError(f"Database error creating entity: {e}") from e

    async def count(self) -> int:
        """
        Count the total number of entities.

        Returns:
            Total count of entities

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(func.count()).select_from(self.model_type)
            result = await self.db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_type.__name__} records: {e}")
            raise RepositoryError(f"Database error counting entities: {e}") from e

    async def exists(self, **kwargs) -> bool:
        """
        Check if an entity exists with the given filters.

        Args:
            **kwargs: Field=value pairs to filter by

        Returns:
            True if entity exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        conditions = [getattr(self.model_type, field) == value for field, value in kwargs.items()]
        if not conditions:
            raise ValueError("No conditions provided for exists check")

        try:
            query = select(func.count()).select_from(self.model_type).where(*conditions)
            result = await self.db.execute(query)
            return result.scalar_one() > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error checking entity existence: {e}") from e
