"""Test utilities for URL shortener tests."""

import random
import string
from typing import Any, Dict, List, Optional, Union

from urlshortener.models.url import UrlMapping, UrlMappingCreate, utc_now
from urlshortener.repositories.base import DuplicateEntityError

TEST_BASE_URL = "https://sho.rt"


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8).lower()}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


async def create_test_mapping(
    db,
    long_url: Optional[str] = None,
    short_code: Optional[str] = None,
) -> UrlMapping:
    """Create and persist a test UrlMapping in the database."""
    mapping = UrlMapping(
        long_url=long_url or random_url(),
        short_code=short_code or random_string(7),
    )
    db.add(mapping)
    await db.flush()
    await db.refresh(mapping)
    return mapping


class InMemoryURLRepository:
    """Dict-backed stand-in for URLRepository with the same contract."""

    def __init__(self):
        self.mappings: List[UrlMapping] = []
        self.save_calls = 0

    async def save(self, data: Union[UrlMappingCreate, Dict[str, Any]]) -> UrlMapping:
        self.save_calls += 1
        if isinstance(data, UrlMappingCreate):
            data = data.model_dump()
        if await self.exists_by_short_code(data["short_code"]):
            raise DuplicateEntityError(UrlMapping, "short_code", data["short_code"])
        mapping = UrlMapping(
            id=len(self.mappings) + 1,
            created_at=utc_now(),
            **data,
        )
        self.mappings.append(mapping)
        return mapping

    async def find_by_short_code(self, short_code: str) -> Optional[UrlMapping]:
        return next((m for m in self.mappings if m.short_code == short_code), None)

    async def find_by_long_url(self, long_url: str) -> Optional[UrlMapping]:
        return next((m for m in self.mappings if m.long_url == long_url), None)

    async def exists_by_short_code(self, short_code: str) -> bool:
        return await self.find_by_short_code(short_code) is not None
