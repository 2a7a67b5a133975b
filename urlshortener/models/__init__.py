"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from urlshortener.models.url import (
    LONG_URL_MAX_LENGTH,
    SHORT_CODE_LENGTH,
    ShortURLCreated,
    ShortURLInfo,
    UrlMapping,
    UrlMappingBase,
    UrlMappingCreate,
)

__all__ = [
    "LONG_URL_MAX_LENGTH",
    "SHORT_CODE_LENGTH",
    "ShortURLCreated",
    "ShortURLInfo",
    "UrlMapping",
    "UrlMappingBase",
    "UrlMappingCreate",
]
