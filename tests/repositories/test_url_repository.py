"""Tests for the URL repository."""

from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import patch

from urlshortener.repositories.url_repository import URLRepository, DuplicateEntityError
from urlshortener.models.url import UrlMapping, UrlMappingCreate
from tests.utils import create_test_mapping, random_url


@pytest.mark.repository
class TestURLRepository:
    """Test suite for URL repository."""

    @pytest.mark.asyncio
    async def test_save(self, test_db, url_repository):
        """Test mapping creation."""
        long_url = random_url()

        mapping = await url_repository.save(
            UrlMappingCreate(short_code="abc1234", long_url=long_url)
        )

        assert mapping.id is not None
        assert mapping.short_code == "abc1234"
        assert mapping.long_url == long_url
        assert isinstance(mapping.created_at, datetime)

        db_mapping = await url_repository.find_by_short_code("abc1234")
        assert db_mapping is not None
        assert db_mapping.id == mapping.id

    @pytest.mark.asyncio
    async def test_save_stamps_utc_creation_time(self, test_db, url_repository):
        """Creation time defaults to an aware UTC timestamp the store accepts."""
        fresh = UrlMapping(short_code="utc1234", long_url="https://example.com/utc")
        assert fresh.created_at.tzinfo is not None
        assert fresh.created_at.utcoffset() == timedelta(0)

        before = datetime.now(timezone.utc)
        mapping = await url_repository.save(
            UrlMappingCreate(short_code="utc5678", long_url="https://example.com/utc")
        )

        assert mapping.id is not None
        # SQLite hands back naive values; compare as UTC
        stored = mapping.created_at
        if stored.tzinfo is None:
            stored = stored.replace(tzinfo=timezone.utc)
        assert stored >= before - timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_save_from_dict(self, test_db, url_repository):
        mapping = await url_repository.save({"short_code": "dict123", "long_url": "https://example.com"})
        assert mapping.short_code == "dict123"

    @pytest.mark.asyncio
    async def test_save_duplicate_short_code(self, test_db, url_repository):
        """Duplicate codes are caught by the existence pre-check."""
        await create_test_mapping(test_db, short_code="dup1234")

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.save(
                UrlMappingCreate(short_code="dup1234", long_url=random_url())
            )

        assert excinfo.value.field_name == "short_code"
        assert excinfo.value.value == "dup1234"

    @pytest.mark.asyncio
    async def test_save_duplicate_detected_by_unique_index(self, test_db, url_repository):
        """A race past the pre-check still surfaces as DuplicateEntityError."""
        await url_repository.save(UrlMappingCreate(short_code="race123", long_url=random_url()))
        await test_db.commit()

        with patch.object(url_repository, "exists_by_short_code", return_value=False):
            with pytest.raises(DuplicateEntityError):
                await url_repository.save(
                    UrlMappingCreate(short_code="race123", long_url=random_url())
                )

        # The session stays usable after the failed insert
        assert await url_repository.find_by_short_code("race123") is not None
        assert await url_repository.count() == 1

    @pytest.mark.asyncio
    async def test_find_by_short_code_nonexistent(self, test_db, url_repository):
        assert await url_repository.find_by_short_code("nothere") is None

    @pytest.mark.asyncio
    async def test_find_by_short_code_is_case_sensitive(self, test_db, url_repository):
        await create_test_mapping(test_db, short_code="AbCdEfG")
        assert await url_repository.find_by_short_code("abcdefg") is None

    @pytest.mark.asyncio
    async def test_find_by_long_url(self, test_db, url_repository):
        long_url = random_url()
        mapping = await create_test_mapping(test_db, long_url=long_url, short_code="long123")

        found = await url_repository.find_by_long_url(long_url)

        assert found is not None
        assert found.id == mapping.id
        assert await url_repository.find_by_long_url(long_url + "/other") is None

    @pytest.mark.asyncio
    async def test_find_by_long_url_returns_oldest(self, test_db, url_repository):
        """Racing creators can leave two mappings for one URL."""
        long_url = random_url()
        first = await create_test_mapping(test_db, long_url=long_url, short_code="first01")
        await create_test_mapping(test_db, long_url=long_url, short_code="second1")

        found = await url_repository.find_by_long_url(long_url)

        assert found.id == first.id

    @pytest.mark.asyncio
    async def test_exists_by_short_code(self, test_db, url_repository):
        await create_test_mapping(test_db, short_code="exists1")

        assert await url_repository.exists_by_short_code("exists1") is True
        assert await url_repository.exists_by_short_code("missing") is False

    @pytest.mark.asyncio
    async def test_get_by_id_and_count(self, test_db, url_repository):
        mapping = await create_test_mapping(test_db)
        await create_test_mapping(test_db)

        assert (await url_repository.get_by_id(mapping.id)).short_code == mapping.short_code
        assert await url_repository.get_by_id(999999) is None
        assert await url_repository.count() == 2

    @pytest.mark.asyncio
    async def test_exists_requires_conditions(self, test_db, url_repository):
        with pytest.raises(ValueError):
            await url_repository.exists()

    def test_repository_bound_to_session(self, test_db):
        repository = URLRepository(test_db)
        assert repository.db is test_db
        assert repository.model_type is UrlMapping
