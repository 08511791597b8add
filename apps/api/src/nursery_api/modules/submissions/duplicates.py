"""
Duplicate Guards

Per-form uniqueness rules, checked against persisted records before insert.
A guard returns a ``Duplicate`` describing the rejection, or None when the
submission may proceed.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from nursery_api.modules.submissions.store import SubmissionStore

CONTACT_REPEAT_WINDOW = timedelta(minutes=5)
JOB_REAPPLY_WINDOW = timedelta(days=30)


@dataclass(frozen=True)
class Duplicate:
    message: str
    errors: list[str] = field(default_factory=list)
    status_code: int = 409


DuplicateGuard = Callable[[SubmissionStore, Any, datetime], Awaitable[Duplicate | None]]


def same_phone(message: str, error: str) -> DuplicateGuard:
    """Any existing record with the same normalised phone number, whatever its status."""

    async def guard(store: SubmissionStore, form: Any, _now: datetime) -> Duplicate | None:
        existing = await store.find_one(store.model.phone_normalized == form.phone_normalized)
        if existing is None:
            return None
        return Duplicate(message=message, errors=[error])

    return guard


def identical_recent_message(window: timedelta = CONTACT_REPEAT_WINDOW) -> DuplicateGuard:
    """Same phone number and same message body within ``window``."""
    minutes = int(window.total_seconds() // 60)

    async def guard(store: SubmissionStore, form: Any, now: datetime) -> Duplicate | None:
        model = store.model
        existing = await store.find_one(
            model.phone_normalized == form.phone_normalized,
            model.message == form.message,
            model.created_at >= now - window,
        )
        if existing is None:
            return None
        return Duplicate(
            message=(
                f"You have already sent us this message in the last {minutes} minutes. "
                "Please wait before submitting it again."
            ),
            errors=[
                f"Duplicate submission detected - please wait {minutes} minutes "
                "before sending the same message again"
            ],
            status_code=429,
        )

    return guard


def recent_application_for_position(window: timedelta = JOB_REAPPLY_WINDOW) -> DuplicateGuard:
    """Same applicant email and same position within ``window``."""
    days = window.days

    async def guard(store: SubmissionStore, form: Any, now: datetime) -> Duplicate | None:
        model = store.model
        existing = await store.find_one(
            model.email_address == form.email_address,
            model.position_applying_for == form.position_applying_for,
            model.created_at >= now - window,
        )
        if existing is None:
            return None
        return Duplicate(
            message=(
                f"You have already applied for this position in the last {days} days. "
                "Please wait before reapplying."
            ),
            errors=["Duplicate application detected for this position"],
        )

    return guard


SLOT_TAKEN_MESSAGE = "This time slot is already booked"
SLOT_TAKEN_ERROR = "The selected time slot is no longer available"


def visit_slot_taken() -> DuplicateGuard:
    """
    One visit per family per day, and one family per time slot.

    The family rule is checked first so a parent re-booking the same day sees
    that message rather than the slot one.
    """

    async def guard(store: SubmissionStore, form: Any, _now: datetime) -> Duplicate | None:
        model = store.model
        same_day = await store.find_one(
            model.email == form.email,
            model.visit_date == form.visit_date,
        )
        if same_day is not None:
            return Duplicate(
                message="You already have a booking for this date",
                errors=["A booking with this email already exists for the selected date"],
            )

        slot = await store.find_one(
            model.visit_date == form.visit_date,
            model.visit_time == form.visit_time,
        )
        if slot is not None:
            return Duplicate(message=SLOT_TAKEN_MESSAGE, errors=[SLOT_TAKEN_ERROR])
        return None

    return guard
