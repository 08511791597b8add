"""
Maintenance Router

Endpoints:
- GET /cron/keep-alive - Ping the store; called by an external scheduler

Security:
- Requires ``Authorization: Bearer <CRON_SECRET>``
- Answers 500 when no secret is configured, rather than running unauthenticated
"""

import logging
import secrets

from fastapi import APIRouter, Header, HTTPException, status

from nursery_api.core.config import settings
from nursery_api.core.responses import ApiResponse
from nursery_api.modules.maintenance.service import ping_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/keep-alive",
    response_model=ApiResponse[dict],
    response_model_exclude_none=True,
    summary="Store Keep-Alive",
    responses={
        401: {"description": "Missing or wrong cron secret"},
        500: {"description": "Cron secret not configured, or the ping failed"},
    },
)
async def keep_alive(authorization: str | None = Header(None)) -> ApiResponse[dict]:
    if not settings.cron_secret:
        logger.error("Keep-alive called but CRON_SECRET is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "CRON_NOT_CONFIGURED", "message": "Cron secret is not configured"},
        )

    expected = f"Bearer {settings.cron_secret}"
    if not authorization or not secrets.compare_digest(authorization, expected):
        logger.warning("Keep-alive called with an invalid cron secret")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "UNAUTHORIZED", "message": "Unauthorized"},
        )

    result = await ping_store()
    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "KEEP_ALIVE_FAILED",
                "message": "Database keep-alive failed",
                "errors": ["Database ping failed"],
            },
        )

    return ApiResponse(
        message="Database keep-alive successful",
        data={
            "timestamp": result.checked_at.isoformat(),
            "durationMs": round(result.duration_ms, 1),
        },
    )
