"""Service layer for the URL shortener application.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between repositories and provide domain-specific operations.
"""

from urlshortener.services.shortener import ShortenerService
from urlshortener.services.short_code import ShortCodeGenerator, is_valid_short_code

__all__ = ["ShortenerService", "ShortCodeGenerator", "is_valid_short_code"]
