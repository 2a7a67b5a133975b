"""Health check endpoints for monitoring application status."""

import time

from fastapi import APIRouter, Depends, status

from urlshortener.core.config import settings
from urlshortener.db.base import Database
from urlshortener.db.session import get_database

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Get system health status",
    response_description="Health status of all system components"
)
async def health_check(database: Database = Depends(get_database)):
    """Check health of the service and its database."""
    database_status = await database.check_connection()

    return {
        "status": "healthy" if database_status["status"] == "healthy" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "components": {"database": database_status},
    }
