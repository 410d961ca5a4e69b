"""Health check endpoint."""

import logging

from fastapi import APIRouter

from potsettle.config import settings
from potsettle.dal.database import get_database

logger = logging.getLogger("potsettle.routes.health")
router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """
    Health check endpoint with MongoDB connectivity test.

    Returns 200 OK even if the database is unavailable; the database
    status is reported in the response body.

    Returns:
        dict: Health status, version, and database connectivity status.
    """
    health_response = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "checks": {
            "database": "unknown"
        }
    }

    try:
        db = get_database()
        await db.command("ping")
        health_response["checks"]["database"] = "ok"
    except Exception as e:
        logger.warning("Database health check failed: %s", str(e))
        health_response["checks"]["database"] = "down"
        health_response["status"] = "degraded"

    return health_response
