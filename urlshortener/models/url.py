"""URL shortener data models.

This module defines the UrlMapping model for storing short code to long URL
mappings in the database, plus the plain payloads the service layer returns.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import field_validator
from sqlalchemy import DateTime, Index
from sqlmodel import Field, SQLModel

SHORT_CODE_LENGTH = 7
LONG_URL_MAX_LENGTH = 2048


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UrlMappingBase(SQLModel):
    """Base model for URL mapping data."""

    short_code: str = Field(
        max_length=SHORT_CODE_LENGTH,
        unique=True,   # Collisions are detected through this index
        description="Unique 7-character base-62 code"
    )
    long_url: str = Field(
        max_length=LONG_URL_MAX_LENGTH,
        description="The original (long) URL to redirect to"
    )

    @field_validator("long_url", mode="before")
    @classmethod
    def ensure_str_url(cls, v):
        # Accept pydantic URL objects as well as plain strings
        if v is not None and not isinstance(v, str):
            return str(v)
        return v


class UrlMapping(UrlMappingBase, table=True):
    """
    URL mapping stored in the database.

    Rows are written once by the create path and never updated or deleted.
    """

    __tablename__ = "url_mappings"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        description="Timestamp when this mapping was created"
    )

    __table_args__ = (
        # Dedup lookups by long URL. Not unique: concurrent creators may race.
        Index("ix_url_mappings_long_url", "long_url"),
    )


class UrlMappingCreate(UrlMappingBase):
    """Schema for persisting a new mapping."""
    pass


class ShortURLCreated(SQLModel):
    """Result of shortening a URL."""
    short_code: str
    short_url: str
    long_url: str


class ShortURLInfo(SQLModel):
    """Stored fields of a mapping, returned by lookups."""
    short_code: str
    long_url: str
    created_at: datetime
