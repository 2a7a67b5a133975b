"""URL shortening service for the URL shortener application.

This module contains the ShortenerService class which implements the create
and lookup use cases on top of the URL repository and the short code generator.
"""

from urlshortener.models.url import ShortURLCreated, ShortURLInfo, UrlMapping, UrlMappingCreate
from urlshortener.repositories.base import DuplicateEntityError
from urlshortener.repositories.url_repository import URLRepository
from urlshortener.services.exceptions import (
    InvalidShortCodeError,
    InvalidURLError,
    ShortCodeGenerationError,
    URLNotFoundError,
)
from urlshortener.services.short_code import ShortCodeGenerator, is_valid_short_code
from urlshortener.services.url_validator import check_long_url, sanitize_url

MAX_COLLISION_RETRIES = 5


class ShortenerService:
    """
    Service for URL shortening business logic.

    The service holds no mutable state; concurrent calls only coordinate
    through the store's unique index on the short code.
    """

    def __init__(
        self,
        url_repository: URLRepository,
        code_generator: ShortCodeGenerator,
        base_url: str,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Repository for URL data access
            code_generator: Source of candidate short codes
            base_url: Prefix for the public short URLs
        """
        self.url_repository = url_repository
        self.code_generator = code_generator
        self.base_url = base_url.rstrip("/")

    async def create(self, raw_url: str) -> ShortURLCreated:
        """
        Shorten a URL, reusing an existing mapping for the same long URL.

        Args:
            raw_url: URL as submitted by the caller

        Returns:
            ShortURLCreated: short code, short URL and stored long URL

        Raises:
            InvalidURLError: If the URL is malformed or uses a disallowed scheme
            ShortCodeGenerationError: If every generated code collided
            RepositoryError: On any other storage failure
        """
        if raw_url is None:
            raise InvalidURLError("URL is required")

        long_url = sanitize_url(str(raw_url))
        is_valid, reasons = check_long_url(long_url)
        if not is_valid:
            raise InvalidURLError(", ".join(reasons))

        existing = await self.url_repository.find_by_long_url(long_url)
        if existing is not None:
            return self._build_created(existing)

        for attempt in range(MAX_COLLISION_RETRIES):
            short_code = self.code_generator.generate(long_url, attempt)
            try:
                saved = await self.url_repository.save(
                    UrlMappingCreate(short_code=short_code, long_url=long_url)
                )
            except DuplicateEntityError:
                continue
            return self._build_created(saved)

        raise ShortCodeGenerationError(MAX_COLLISION_RETRIES)

    async def get(self, short_code: str) -> ShortURLInfo:
        """
        Look up the mapping for a short code.

        Raises:
            InvalidShortCodeError: If the code is not 7 base-62 characters
            URLNotFoundError: If no mapping uses this code
        """
        if not is_valid_short_code(short_code):
            raise InvalidShortCodeError("Invalid short code format")

        mapping = await self.url_repository.find_by_short_code(short_code)
        if mapping is None:
            raise URLNotFoundError(short_code)

        return ShortURLInfo(
            short_code=mapping.short_code,
            long_url=mapping.long_url,
            created_at=mapping.created_at,
        )

    async def get_long_url(self, short_code: str) -> str:
        """Return only the long URL for a short code (redirect path)."""
        info = await self.get(short_code)
        return info.long_url

    def build_short_url(self, short_code: str) -> str:
        return f"{self.base_url}/{short_code}"

    def _build_created(self, mapping: UrlMapping) -> ShortURLCreated:
        return ShortURLCreated(
            short_code=mapping.short_code,
            short_url=self.build_short_url(mapping.short_code),
            long_url=mapping.long_url,
        )
