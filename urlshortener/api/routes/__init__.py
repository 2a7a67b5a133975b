"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from urlshortener.api.routes import shortener, redirect, health
from urlshortener.core.config import settings

# Create root router
api_router = APIRouter()

# POST /shorten lives at the root path
api_router.include_router(shortener.router)

# URL information under the API prefix: /api/{short_code}
api_router.include_router(
    shortener.info_router,
    prefix=settings.API_PREFIX
)

api_router.include_router(health.router)

# Include redirect routes last at the root path (no prefix)
# This makes short URLs available directly at /{short_code}
api_router.include_router(
    redirect.router
)

__all__ = ["api_router"]
