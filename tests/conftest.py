"""Test fixtures for the URL shortener application."""

import os

# Settings are read at import time, so the test environment must be set first
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("HASH_SALT", "test-salt")

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from urlshortener.api.dependencies import get_base_url
from urlshortener.db.base import Database
from urlshortener.main import create_app
# Import models to ensure they're registered with SQLModel metadata
from urlshortener.models.url import UrlMapping  # noqa: F401
from urlshortener.repositories.url_repository import URLRepository
from urlshortener.services.short_code import ShortCodeGenerator
from tests.utils import TEST_BASE_URL


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def url_repository(test_db) -> URLRepository:
    """Return a URL repository bound to the test session."""
    return URLRepository(test_db)


@pytest.fixture
def code_generator() -> ShortCodeGenerator:
    """Return a generator with real entropy and a fixed salt."""
    return ShortCodeGenerator(salt="test-salt")


@pytest.fixture
def test_app() -> FastAPI:
    """Create FastAPI test app backed by its own in-memory database."""
    app = create_app(Database(TEST_SQLALCHEMY_DATABASE_URL))
    app.dependency_overrides[get_base_url] = lambda: TEST_BASE_URL
    return app


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance; entering it runs the lifespan."""
    with TestClient(test_app) as test_client:
        yield test_client
