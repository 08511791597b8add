"""
Waitlist Router

Endpoints:
- POST /waitlist/join - Join the waitlist (201, 409 if the phone is already listed)
- GET /waitlist/join?phone=... - Current position and estimated wait (404 if not active)
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from nursery_api.core.database import get_db
from nursery_api.core.rate_limit import rate_limit
from nursery_api.core.responses import ApiResponse
from nursery_api.modules.submissions.router import INTERNAL_ERROR_DETAIL, run_submission
from nursery_api.modules.submissions.service import FormServiceError
from nursery_api.modules.waitlist import service
from nursery_api.modules.waitlist.schemas import WaitlistJoinData, WaitlistStatusData
from nursery_api.modules.waitlist.service import WaitlistPipeline, estimate_wait

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/join",
    response_model=ApiResponse[WaitlistJoinData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Join Waitlist",
    description="""
Add a family to the waitlist.

The new entry is placed after every active entry; the response carries the
position and an estimated wait (1-5: 1-2 weeks, 6-15: 1-2 months, later: 2-4 months).

**Duplicate Prevention:**
- One entry per phone number, whatever its status (409)
""",
    responses={
        400: {"description": "Validation failed"},
        409: {"description": "Phone number already on the waitlist"},
        429: {"description": "Too many submissions from this client"},
    },
)
@rate_limit()
async def join_waitlist(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[WaitlistJoinData]:
    result = await run_submission(WaitlistPipeline(db), request, payload)
    entry = result.record

    logger.info(f"Waitlist entry {entry.id} joined at position {entry.position}")

    return ApiResponse(
        message=result.message,
        data=WaitlistJoinData(
            id=entry.id,
            reference=entry.reference,
            position=entry.position,
            estimated_wait_time=estimate_wait(entry.position),
            submitted_at=entry.created_at,
        ),
    )


@router.get(
    "/join",
    response_model=ApiResponse[WaitlistStatusData],
    response_model_exclude_none=True,
    summary="Check Waitlist Position",
    responses={
        400: {"description": "Phone number parameter is missing"},
        404: {"description": "No active waitlist entry for this phone number"},
    },
)
async def get_waitlist_status(
    phone: str | None = Query(None, description="Phone number used to join"),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[WaitlistStatusData]:
    if not phone or not phone.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "PHONE_REQUIRED",
                "message": "Phone number is required",
                "errors": ["Phone number parameter is missing"],
            },
        )

    try:
        result = await service.get_status(db, phone)
    except FormServiceError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": e.error_code,
                "message": e.message,
                "errors": e.errors,
            },
        ) from e
    except Exception as e:
        logger.exception(f"Unexpected error retrieving waitlist status: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        ) from e

    return ApiResponse(
        message="Waitlist status retrieved successfully",
        data=WaitlistStatusData(
            reference=result.reference,
            position=result.position,
            estimated_wait_time=result.estimated_wait_time,
            joined_at=result.joined_at,
            status=result.status,
        ),
    )
