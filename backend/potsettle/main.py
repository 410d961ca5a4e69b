"""
PotSettle FastAPI Application Entry Point.

Configures FastAPI, sets up middleware, registers routes and manages the
MongoDB connection lifecycle.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from potsettle.config import settings
from potsettle.dal.database import connect_to_mongo, close_mongo_connection, ensure_indexes, get_database
from potsettle.routes.health import router as health_router
from potsettle.routes.sessions import router as sessions_router

logging.getLogger("potsettle").setLevel(settings.LOG_LEVEL)
logger = logging.getLogger("potsettle.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.
    Handles startup and shutdown events for MongoDB connection.
    """
    try:
        await connect_to_mongo()
        db = get_database()
        await ensure_indexes(db)
        logger.info("PotSettle v%s started with database connection", settings.APP_VERSION)
    except Exception as e:
        # Start anyway; /health reports the database as down.
        logger.warning(
            "Failed to connect to MongoDB during startup: %s. "
            "Application will start but database operations will fail until connection is established.",
            str(e)
        )
        logger.info("PotSettle v%s started WITHOUT database connection", settings.APP_VERSION)

    yield

    await close_mongo_connection()
    logger.info("PotSettle shutdown complete")


app = FastAPI(
    title="PotSettle API",
    description="Poker session settlement - REST API",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

# Register routers
app.include_router(health_router)  # Health endpoint at root level
app.include_router(health_router, prefix="/api")
app.include_router(sessions_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "PotSettle API",
        "version": settings.APP_VERSION,
        "status": "operational",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "potsettle.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )
