"""
Submissions Router

Public intake endpoints for the nursery's forms. No authentication; every
POST is throttled per client IP.

Endpoints:
- POST /forms/application - Application & registration form
- POST /forms/medical - Medical form
- POST /forms/consent - Consent form
- POST /forms/funding - Funding declaration
- POST /forms/change - Change of details
- POST /forms/aboutme - All About Me profile
- POST /jobs/apply - Job application
- POST /contact - Contact enquiry
- POST /availability/check - Availability request
- POST /bookings - Nursery visit booking

Responses use the ``{success, message, data?, errors?}`` envelope:
201 on success, 400 with the full error list when validation fails,
409/429 for duplicates, 500 for anything unexpected.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from nursery_api.core.database import get_db
from nursery_api.core.rate_limit import rate_limit
from nursery_api.core.responses import ApiResponse
from nursery_api.modules.submissions import definitions
from nursery_api.modules.submissions.schemas import (
    JobApplicationSubmissionData,
    SubmissionData,
    VisitBookingSubmissionData,
)
from nursery_api.modules.submissions.service import (
    FormServiceError,
    SubmissionPipeline,
    SubmissionResult,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR_DETAIL = {
    "error": "INTERNAL_ERROR",
    "message": "An internal server error occurred. Please try again later.",
    "errors": ["Server error - please contact support if this persists"],
}


async def run_submission(
    pipeline: SubmissionPipeline,
    request: Request,
    payload: Any,
) -> SubmissionResult:
    """
    Run a pipeline and translate its errors into HTTP responses.

    Raises:
        HTTPException: With the service error's status, or 500
    """
    label = pipeline.definition.form_type.value
    try:
        return await pipeline.submit(payload, user_agent=request.headers.get("user-agent"))

    except FormServiceError as e:
        logger.warning(f"{label} submission rejected ({e.status_code}): {e.message}")
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": e.error_code,
                "message": e.message,
                "errors": e.errors,
            },
        ) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error processing {label} submission: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_DETAIL,
        ) from e


def _created(result: SubmissionResult) -> ApiResponse[SubmissionData]:
    record = result.record
    return ApiResponse(
        message=result.message,
        data=SubmissionData(
            id=record.id,
            reference=record.reference,
            status=record.status,
            submitted_at=record.created_at,
        ),
    )


async def _submit_form(
    definition: definitions.FormDefinition,
    request: Request,
    payload: Any,
    db: AsyncSession,
) -> ApiResponse[SubmissionData]:
    result = await run_submission(SubmissionPipeline(definition, db), request, payload)
    return _created(result)


SUBMISSION_RESPONSES = {
    400: {"description": "Validation failed - every failing rule is listed in errors"},
    429: {"description": "Too many submissions from this client"},
    500: {"description": "Unexpected server error"},
}


# ============================================
# Enrolment forms
# ============================================


@router.post(
    "/forms/application",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Application & Registration Form",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_application(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.REGISTRATION, request, payload, db)


@router.post(
    "/forms/medical",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Medical Form",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_medical(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.MEDICAL, request, payload, db)


@router.post(
    "/forms/consent",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Consent Form",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_consent(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.CONSENT, request, payload, db)


@router.post(
    "/forms/funding",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Funding Declaration",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_funding(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.FUNDING, request, payload, db)


@router.post(
    "/forms/change",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Change of Details",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_change(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.CHANGE, request, payload, db)


@router.post(
    "/forms/aboutme",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit All About Me Form",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_about_me(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.ABOUT_ME, request, payload, db)


# ============================================
# Careers
# ============================================


@router.post(
    "/jobs/apply",
    response_model=ApiResponse[JobApplicationSubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Job Application",
    description="""
Submit an application for an advertised position.

**Duplicate Prevention:**
- One application per email address and position every 30 days (409)

Applicants must be at least 16 years old.
""",
    responses={**SUBMISSION_RESPONSES, 409: {"description": "Recent application for this position"}},
)
@rate_limit()
async def submit_job_application(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[JobApplicationSubmissionData]:
    result = await run_submission(
        SubmissionPipeline(definitions.JOB_APPLICATION, db), request, payload
    )
    record = result.record
    return ApiResponse(
        message=result.message,
        data=JobApplicationSubmissionData(
            id=record.id,
            reference=record.reference,
            status=record.status,
            submitted_at=record.created_at,
            position_applying_for=record.position_applying_for,
            next_steps=definitions.JOB_NEXT_STEPS,
        ),
    )


# ============================================
# Enquiries
# ============================================


@router.post(
    "/contact",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Send Contact Enquiry",
    description="""
Send a message to the nursery.

**Duplicate Prevention:**
- The same message from the same phone number within 5 minutes is rejected (429)
""",
    responses=SUBMISSION_RESPONSES,
)
@rate_limit()
async def submit_contact(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.CONTACT, request, payload, db)


@router.post(
    "/availability/check",
    response_model=ApiResponse[SubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Request Availability Check",
    description="""
Ask the nursery to call back about available places.

**Duplicate Prevention:**
- One request per phone number (409)
""",
    responses={**SUBMISSION_RESPONSES, 409: {"description": "Phone number already registered"}},
)
@rate_limit()
async def submit_availability(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[SubmissionData]:
    return await _submit_form(definitions.AVAILABILITY, request, payload, db)


# ============================================
# Visits
# ============================================


@router.post(
    "/bookings",
    response_model=ApiResponse[VisitBookingSubmissionData],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Book a Nursery Visit",
    description="""
Book a weekday visit in one of the published time slots.

**Duplicate Prevention:**
- One booking per email address per day (409)
- One family per date and time slot (409)
""",
    responses={**SUBMISSION_RESPONSES, 409: {"description": "Date already booked or slot taken"}},
)
@rate_limit()
async def submit_visit_booking(
    request: Request,
    payload: Any = Body(None),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse[VisitBookingSubmissionData]:
    result = await run_submission(
        SubmissionPipeline(definitions.VISIT_BOOKING, db), request, payload
    )
    record = result.record
    return ApiResponse(
        message=result.message,
        data=VisitBookingSubmissionData(
            id=record.id,
            reference=record.reference,
            status=record.status,
            submitted_at=record.created_at,
            visit_date=record.visit_date,
            visit_time=record.visit_time,
        ),
    )
