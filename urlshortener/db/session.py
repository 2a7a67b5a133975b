"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
It includes dependency injection patterns optimized for FastAPI.
"""

from typing import AsyncGenerator, Callable, Optional, TypeVar
import logging
import inspect
from functools import wraps

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from urlshortener.db.base import Database

logger = logging.getLogger(__name__)

# Generic return type for function decorators
T = TypeVar("T")


def get_database(request: Request) -> Database:
    """Return the Database handle opened by the application lifespan."""
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions.

    This is the primary dependency to inject a database session into route handlers.
    It properly manages the session lifecycle, handling cleanup even in case of exceptions.

    Yields:
        AsyncSession: A SQLAlchemy async session object.

    Example:
        ```python
        @router.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            return await URLRepository(db).count()
        ```
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
        except SQLAlchemyError:
            logger.exception("Database error occurred")
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            raise


def db_transaction(db_param_name: Optional[str] = None) -> Callable:
    """Decorator to wrap functions in a database transaction.

    Automatically finds the database session parameter, commits on success or
    rolls back on error. The session parameter is located by name when
    ``db_param_name`` is given, otherwise by its ``AsyncSession`` annotation.

    Args:
        db_param_name: Optional name of the database session parameter.
            The recommended convention is to always name database session parameters 'db'.

    Returns:
        Callable: Decorator function

    Raises:
        ValueError: If no suitable database session parameter is found
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        # Resolve the session parameter once instead of on every call
        parameters = inspect.signature(func).parameters
        db_param_pos = None
        db_param_key = None

        for i, (param_name, param) in enumerate(parameters.items()):
            is_async_session = param.annotation is AsyncSession

            if db_param_name and param_name == db_param_name:
                if not is_async_session:
                    logger.warning(
                        f"Parameter '{db_param_name}' in function '{func.__name__}' is not annotated "
                        f"as AsyncSession. This may cause type-related issues."
                    )
                db_param_pos = i
                db_param_key = param_name
                break
            elif is_async_session and db_param_name is None:
                db_param_pos = i
                db_param_key = param_name
                break

        if db_param_key is None:
            param_info = ", ".join(f"{name}: {param.annotation}" for name, param in parameters.items())
            logger.warning(
                f"Unable to find database session parameter in function '{func.__name__}'. "
                f"Available parameters: {param_info}"
            )

        @wraps(func)
        async def wrapper(*args, **kwargs):
            db = None

            if db_param_key is not None and db_param_key in kwargs:
                db = kwargs[db_param_key]
            elif db_param_pos is not None and len(args) > db_param_pos:
                db = args[db_param_pos]
            else:
                # Fallback: search for any AsyncSession in args or kwargs
                for value in list(args) + list(kwargs.values()):
                    if isinstance(value, AsyncSession):
                        db = value
                        break

            if db is None:
                raise ValueError(
                    f"Database session not found in function arguments for '{func.__name__}'. "
                    f"Ensure a parameter of type AsyncSession is passed to the function."
                )

            try:
                result = await func(*args, **kwargs)
                await db.commit()
                return result
            except Exception as e:
                await db.rollback()
                logger.debug(f"Transaction rolled back in '{func.__name__}': {e!r}")
                raise

        return wrapper
    return decorator
