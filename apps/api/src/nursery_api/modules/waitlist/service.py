"""
Waitlist Service Layer

Joining the waitlist runs through the shared submission pipeline with two
additions: the new entry's position is counted before insert, and the
response, PDF and notifications carry that position and an estimated wait.

Positions:
- at join time: number of active entries + 1
- on lookup: number of active entries created earlier + 1, so a family moves
  up as entries ahead of them leave ``active``

``priority`` is stored for staff use and never affects ordering.
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from nursery_api.modules.submissions import duplicates
from nursery_api.modules.submissions.definitions import FormDefinition
from nursery_api.modules.submissions.documents import Row
from nursery_api.modules.submissions.models import FormType
from nursery_api.modules.submissions.service import FormServiceError, SubmissionPipeline
from nursery_api.modules.submissions.store import SubmissionStore
from nursery_api.modules.submissions.validation import normalize_phone
from nursery_api.modules.waitlist.models import WaitlistEntry, WaitlistStatus

logger = logging.getLogger(__name__)

# (highest position in band, estimate)
WAIT_BANDS = (
    (5, "1-2 weeks"),
    (15, "1-2 months"),
)
LONGEST_WAIT = "2-4 months"


class WaitlistEntryNotFoundError(FormServiceError):
    """Raised when no active waitlist entry matches a phone number."""

    def __init__(self):
        super().__init__(
            message="No active waitlist entry found for this phone number",
            error_code="WAITLIST_ENTRY_NOT_FOUND",
            status_code=404,
            errors=["Phone number not found on waitlist"],
        )


def estimate_wait(position: int) -> str:
    """Map a queue position to the estimated wait shown to families."""
    for ceiling, estimate in WAIT_BANDS:
        if position <= ceiling:
            return estimate
    return LONGEST_WAIT


def _waitlist_info(form: Any) -> list[tuple[str, str]]:
    return [("Phone", form.phone_number), ("Children", form.children_details or "Not provided")]


WAITLIST = FormDefinition(
    form_type=FormType.WAITLIST,
    label="Waitlist Registration",
    prefix="WL",
    model=WaitlistEntry,
    status=WaitlistStatus.ACTIVE,
    primary_name=lambda form: form.full_name,
    subject_name=lambda form: form.full_name,
    success_message=lambda _form: "You've been successfully added to our waitlist!",
    admin_subject=lambda _form, reference: f"New Waitlist Registration - {reference}",
    duplicate_guard=duplicates.same_phone(
        "This phone number is already on our waitlist",
        "Phone number already registered on waitlist",
    ),
    conflict_message="This phone number is already on our waitlist",
    conflict_errors=["Phone number already registered on waitlist"],
    additional_info=_waitlist_info,
    source="website_waitlist",
)


@dataclass(frozen=True)
class WaitlistStatusResult:
    reference: str
    position: int
    estimated_wait_time: str
    joined_at: datetime
    status: str


class WaitlistPipeline(SubmissionPipeline):
    """Join flow: the shared pipeline plus position and wait estimate."""

    def __init__(self, db: AsyncSession):
        super().__init__(WAITLIST, db)

    async def prepare(self, form: Any) -> dict[str, Any]:
        active = await self.store.count(WaitlistEntry.status == WaitlistStatus.ACTIVE)
        return {"position": active + 1}

    def success_message(self, form: Any, record: WaitlistEntry) -> str:
        return (
            "You've been successfully added to our waitlist! You are currently at "
            f"position {record.position}. We'll contact you as soon as a spot becomes "
            "available."
        )

    def document_rows(self, record: WaitlistEntry) -> list[Row]:
        return [
            ("Position", record.position),
            ("Estimated wait", estimate_wait(record.position)),
            ("Status", record.status),
        ]

    def notification_definition(self, record: WaitlistEntry) -> FormDefinition:
        position = record.position
        estimate = estimate_wait(position)
        return dataclasses.replace(
            WAITLIST,
            admin_subject=lambda _form, _reference: f"New Waitlist Registration - Position #{position}",
            additional_info=lambda form: [
                ("Position", f"#{position}"),
                ("Estimated wait", estimate),
                *_waitlist_info(form),
            ],
            alert=lambda _form: f"New family joined the waitlist at position #{position}",
        )


async def get_status(db: AsyncSession, phone: str) -> WaitlistStatusResult:
    """
    Look up the live queue position for a phone number.

    Raises:
        WaitlistEntryNotFoundError: If no active entry matches the number
    """
    store = SubmissionStore(db, WaitlistEntry)
    normalized = normalize_phone(phone)

    entry = await store.find_one(
        WaitlistEntry.phone_normalized == normalized,
        WaitlistEntry.status == WaitlistStatus.ACTIVE,
    )
    if entry is None:
        logger.info("Waitlist lookup found no active entry")
        raise WaitlistEntryNotFoundError()

    ahead = await store.count(
        WaitlistEntry.status == WaitlistStatus.ACTIVE,
        WaitlistEntry.created_at < entry.created_at,
    )
    position = ahead + 1

    return WaitlistStatusResult(
        reference=entry.reference,
        position=position,
        estimated_wait_time=estimate_wait(position),
        joined_at=entry.created_at,
        status=entry.status,
    )
