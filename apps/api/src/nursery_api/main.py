"""
Nursery Forms API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging, database and (optional) Redis connections
- Notification dispatcher workers
- Background job scheduler
- CORS middleware and the response envelope exception handlers
- API routing
- Health check endpoints
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from nursery_api.api import api_router
from nursery_api.core.config import settings
from nursery_api.core.database import close_db, database, init_db
from nursery_api.core.redis import close_redis, init_redis, redis_status
from nursery_api.core.responses import install_exception_handlers
from nursery_api.core.scheduler import (
    list_registered_jobs,
    start_scheduler,
    stop_scheduler,
    trigger_job_manually,
)
from nursery_api.modules.maintenance import register_maintenance_jobs
from nursery_api.modules.submissions import dispatcher

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events including:
    - Redis connection (optional; throttling falls back to memory)
    - Database connection
    - Notification dispatcher
    - Background job scheduler
    """
    # Startup
    logger.info(f"Starting Nursery Forms API in {settings.python_env} mode...")

    # Initialize Redis
    if settings.redis_url:
        try:
            await init_redis()
            logger.info("[OK] Redis connected")
        except Exception as e:
            logger.warning(f"[SKIP] Redis unavailable, using in-memory rate limiting: {e}")

    # Initialize Database
    try:
        await init_db()
        if not settings.is_production:
            # Production schema is managed by Alembic
            await database.create_all()
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    await dispatcher.start()

    # Initialize Background Job Scheduler
    try:
        # Register jobs before starting the scheduler
        register_maintenance_jobs()

        # Start the scheduler
        await start_scheduler()
        logger.info("[OK] Background scheduler started")
    except Exception as e:
        logger.error(f"[FAIL] Background scheduler failed to start: {e}")
        if settings.is_production:
            raise

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down Nursery Forms API...")

    # Stop the scheduler first (wait for running jobs)
    await stop_scheduler()
    logger.info("[OK] Background scheduler stopped")

    # Flush queued notifications before the store goes away
    await dispatcher.stop()

    await close_redis()
    await close_db()
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="Nursery Forms API",
    description="Public form intake, waitlist and notifications for the nursery website",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

install_exception_handlers(app)

app.include_router(api_router, prefix="/api")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}


@app.get("/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint."""
    return {
        "status": "ready",
        "database": "connected" if database.is_connected else "disconnected",
        "redis": await redis_status(),
    }


# ============================================
# Background Job Debug Endpoints
# ============================================
# Development only: list and run registered jobs without waiting for the schedule.

if settings.is_development:

    @app.get("/debug/jobs", tags=["Debug"])
    async def list_jobs():
        """List all registered background jobs and their next run time."""
        return {"jobs": list_registered_jobs()}

    @app.post("/debug/jobs/{job_id}/trigger", tags=["Debug"])
    async def trigger_job(job_id: str):
        """
        Manually trigger a background job.

        Available jobs:
            - store_keep_alive

        Raises:
            HTTPException 400: If job_id is not found.
        """
        try:
            return await trigger_job_manually(job_id)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
