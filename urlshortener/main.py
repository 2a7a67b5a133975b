"""Main application module.

This module builds the FastAPI application, includes routes, and configures
middleware and exception handlers. The lifespan owns the database handle:
it is opened at startup and closed at shutdown.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from urlshortener.api import api_router
from urlshortener.core.config import settings
from urlshortener.core.logging import setup_logging
from urlshortener.db.base import Database
from urlshortener.middleware.logging import LoggingMiddleware
from urlshortener.repositories.base import RepositoryError
from urlshortener.services.short_code import ShortCodeGenerator

# Setup logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database and build process-wide collaborators."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    database: Database = app.state.database
    database.connect()
    if settings.DB_CREATE_TABLES:
        await database.create_tables()

    if settings.HASH_SALT is None:
        logger.warning("HASH_SALT is empty, using a random salt for this process")
    app.state.code_generator = ShortCodeGenerator(salt=settings.HASH_SALT)

    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.APP_NAME}")
        await database.close()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Database handle to use; one for ``settings.DATABASE_URL``
            is created when omitted.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.database = database or Database(settings.DATABASE_URL)

    if settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(LoggingMiddleware)

    app.include_router(api_router)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle validation errors with detailed information."""
        logger.warning(f"Request validation error: {exc}")
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation error", "errors": exc.errors()}
        )

    @app.exception_handler(RepositoryError)
    async def repository_exception_handler(request: Request, exc: RepositoryError):
        """Storage failures the service let through."""
        logger.error(f"Persistence failure in {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error occurred",
                "error_code": "persistence_failure",
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler to catch and log all unhandled exceptions."""
        error_id = f"error-{time.time()}"

        logger.opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}",
            error_id=error_id,
        )

        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error occurred",
                "error_id": error_id,
                "message": str(exc) if settings.DEBUG else "Internal server error"
            }
        )

    return app


app = create_app()
