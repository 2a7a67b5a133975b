"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access database sessions and service instances.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from urlshortener.core.config import settings
from urlshortener.db.session import get_db
from urlshortener.repositories.url_repository import URLRepository
from urlshortener.services.short_code import ShortCodeGenerator
from urlshortener.services.shortener import ShortenerService


async def get_url_repository(db: AsyncSession = Depends(get_db)) -> URLRepository:
    """Get a URL repository bound to the request's session."""
    return URLRepository(db)


def get_code_generator(request: Request) -> ShortCodeGenerator:
    """Get the process-wide short code generator created at startup."""
    return request.app.state.code_generator


def get_base_url() -> str:
    """Get the base URL for shortened links."""
    return settings.BASE_URL


async def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
    code_generator: ShortCodeGenerator = Depends(get_code_generator),
    base_url: str = Depends(get_base_url),
) -> ShortenerService:
    """Get an instance of the URL shortening service."""
    return ShortenerService(
        url_repository=url_repo,
        code_generator=code_generator,
        base_url=base_url,
    )
