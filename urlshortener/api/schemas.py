"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class URLCreateRequest(BaseModel):
    """Request schema for creating a shortened URL.

    ``url`` is kept as a plain string; sanitization and validation happen in
    the service so every caller gets the same rules and messages.
    """
    url: Optional[str] = None


class URLCreateResponse(BaseModel):
    """Response schema for a created (or reused) short URL."""
    short_code: str
    short_url: str  # Full URL including base domain
    long_url: str

    model_config = ConfigDict(from_attributes=True)


class URLInfoResponse(BaseModel):
    """Response schema for URL information."""
    short_code: str
    long_url: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    error_code: Optional[str] = None  # Machine-readable error code
