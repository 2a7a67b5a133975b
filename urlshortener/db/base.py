"""Database base configuration for SQLAlchemy with SQLModel.

This module provides the ``Database`` handle that owns the async engine and
session factory. The handle is created and opened by the process entry point
(the FastAPI lifespan) and closed on shutdown; nothing here connects at import
time.
"""

from typing import AsyncGenerator, Dict, Optional
import asyncio
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from urlshortener.core.config import settings

logger = logging.getLogger(__name__)


def get_engine_config(database_url: str) -> Dict:
    """Get the engine configuration for the current environment and driver.

    Args:
        database_url: SQLAlchemy async database URL

    Returns:
        Dict: Engine configuration parameters.
    """
    if database_url.startswith("sqlite"):
        config: Dict = {
            "echo": settings.DB_ECHO,
            "connect_args": {"check_same_thread": False},
        }
        if ":memory:" in database_url:
            # Share the single in-memory database across sessions
            config["poolclass"] = StaticPool
        return config

    if settings.ENVIRONMENT.value == "testing":
        return {"echo": False, "poolclass": NullPool}

    return {
        "echo": settings.DB_ECHO,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_POOL_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
        "pool_pre_ping": True,
    }


class DatabaseNotConnectedError(RuntimeError):
    """Raised when a session is requested before ``Database.connect``."""


class Database:
    """
    Owner of the async engine and session factory.

    Lifecycle is explicit: call ``connect()`` once at startup and ``close()``
    at shutdown. Sessions are handed to repositories at construction.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotConnectedError("Database.connect() has not been called")
        return self._engine

    def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return

        logger.info(f"Creating database engine for {self._safe_url()}")
        self._engine = create_async_engine(
            self.database_url,
            **get_engine_config(self.database_url),
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def close(self) -> None:
        """Dispose of the engine and drop the session factory."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    async def create_tables(self) -> None:
        """Create all SQLModel tables that don't exist yet."""
        # Register table models on the metadata
        import urlshortener.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async session with proper cleanup.

        Yields:
            AsyncSession: SQLAlchemy async session
        """
        if self._session_factory is None:
            raise DatabaseNotConnectedError("Database.connect() has not been called")
        session = self._session_factory()
        try:
            yield session
        finally:
            await session.close()

    async def check_connection(self) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }

    def _safe_url(self) -> str:
        # Hide credentials in log output
        scheme, _, rest = self.database_url.partition("://")
        if "@" in rest:
            rest = rest.split("@", 1)[1]
        return f"{scheme}://{rest}"
