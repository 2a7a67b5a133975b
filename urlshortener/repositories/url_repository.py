"""URL Repository for the URL shortener application.

This module provides the URLRepository class for database operations related to
UrlMapping models. Following the Repository pattern, it abstracts database
interactions for the create and lookup paths.
"""

import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from urlshortener.models.url import UrlMapping, UrlMappingCreate
from urlshortener.repositories.base import (
    BaseRepository,
    DuplicateEntityError,
    RepositoryError,
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class URLRepository(BaseRepository[UrlMapping, UrlMappingCreate]):
    """
    Repository for UrlMapping database operations.

    Mappings are only ever inserted and read; uniqueness of ``short_code`` is
    enforced by the database and surfaced as ``DuplicateEntityError``.
    """

    def __init__(self, db: AsyncSession):
        """Initialize the repository with a session and the UrlMapping model type."""
        super().__init__(db, UrlMapping)

    async def save(self, data: Union[UrlMappingCreate, Dict[str, Any]]) -> UrlMapping:
        """
        Persist a new mapping.

        Args:
            data: Mapping data (either as a UrlMappingCreate model or dictionary)

        Returns:
            The created UrlMapping entity

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        if isinstance(data, UrlMappingCreate):
            short_code = data.short_code
        else:
            short_code = data.get("short_code")

        # Cheap pre-check; the unique index remains the source of truth
        if short_code and await self.exists_by_short_code(short_code):
            raise DuplicateEntityError(self.model_type, "short_code", short_code)

        try:
            return await self.create(data)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError(self.model_type, "short_code", short_code) from e
            logger.error(f"Integrity error saving URL mapping: {e}")
            raise RepositoryError(f"Database error saving URL mapping: {e}") from e

    async def find_by_short_code(self, short_code: str) -> Optional[UrlMapping]:
        """
        Find a mapping by its short code.

        Args:
            short_code: The unique short code to look up

        Returns:
            The UrlMapping if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short_code == short_code)
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving URL by short code: {e}")
            raise RepositoryError(f"Error retrieving URL by short code: {e}") from e

    async def find_by_long_url(self, long_url: str) -> Optional[UrlMapping]:
        """
        Find an existing mapping for a long URL.

        More than one mapping can exist for the same long URL when creators
        race; the oldest one is returned.

        Args:
            long_url: Exact long URL to look up

        Returns:
            The UrlMapping if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = (
                select(self.model_type)
                .where(self.model_type.long_url == long_url)
                .order_by(self.model_type.id)
                .limit(1)
            )
            result = await self.db.execute(query)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving URL by long URL: {e}")
            raise RepositoryError(f"Error retrieving URL by long URL: {e}") from e

    async def exists_by_short_code(self, short_code: str) -> bool:
        """
        Check if a short code is already taken.

        Args:
            short_code: The short code to check

        Returns:
            True if the short code exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.exists(short_code=short_code)
