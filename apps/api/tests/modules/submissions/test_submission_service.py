"""
Unit tests for the submission pipeline.

These tests cover:
- Successful submission (persist, render, notify)
- Validation and duplicate errors
- Unique index conflicts mapped to duplicates
- Render failures skipping notifications without undoing the record
"""

from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from nursery_api.modules.submissions import definitions
from nursery_api.modules.submissions.documents import RenderError
from nursery_api.modules.submissions.models import ChildRegistration, ContactInquiry
from nursery_api.modules.submissions.references import reference_pattern
from nursery_api.modules.submissions.service import (
    DuplicateSubmissionError,
    FormServiceError,
    FormValidationError,
    RecentDuplicateError,
    SubmissionPipeline,
)

TODAY = date(2026, 6, 15)


class TestSubmit:
    """Tests for SubmissionPipeline.submit against a real store."""

    @pytest.mark.asyncio
    async def test_registration_success(self, db_session, mock_send_email, registration_payload):
        pipeline = SubmissionPipeline(definitions.REGISTRATION, db_session)

        result = await pipeline.submit(registration_payload, user_agent="pytest", today=TODAY)

        record = result.record
        assert reference_pattern("APP").match(record.reference)
        assert record.status == "submitted"
        assert record.user_agent == "pytest"
        assert record.source == "website"
        assert record.priority == "normal"
        assert record.parent1_email == "grace.okafor@example.com"
        assert record.days_attending == ["Mon", "Wed", "Fri"]
        assert result.message == "Application submitted successfully for Ada Okafor"
        assert result.document.startswith(b"%PDF")

        stored = (await db_session.execute(select(ChildRegistration))).scalars().all()
        assert [r.reference for r in stored] == [record.reference]

        # Staff message, then the confirmation to parent 1
        recipients = [c.args[0].to for c in mock_send_email.call_args_list]
        assert recipients == ["admin@nursery.test", "grace.okafor@example.com"]

    @pytest.mark.asyncio
    async def test_missing_user_agent_recorded_as_unknown(
        self, db_session, mock_send_email, consent_payload
    ):
        pipeline = SubmissionPipeline(definitions.CONSENT, db_session)

        result = await pipeline.submit(consent_payload, today=TODAY)

        assert result.record.user_agent == "unknown"
        assert result.record.local_walks is True
        assert result.record.face_painting is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "definition, fixture, status",
        [
            (definitions.MEDICAL, "medical_payload", "active"),
            (definitions.FUNDING, "funding_payload", "pending_verification"),
            (definitions.CHANGE, "change_payload", "pending"),
            (definitions.ABOUT_ME, "about_me_payload", "completed"),
            (definitions.JOB_APPLICATION, "job_application_payload", "submitted"),
            (definitions.CONTACT, "contact_payload", "new"),
            (definitions.AVAILABILITY, "availability_payload", "pending"),
            (definitions.VISIT_BOOKING, "visit_booking_payload", "scheduled"),
        ],
    )
    async def test_initial_status(
        self, request, db_session, mock_send_email, definition, fixture, status
    ):
        pipeline = SubmissionPipeline(definition, db_session)

        result = await pipeline.submit(request.getfixturevalue(fixture), today=TODAY)

        assert result.record.status == status
        assert result.record.reference.startswith(f"{definition.prefix}-")

    @pytest.mark.asyncio
    async def test_contact_has_no_document(self, db_session, mock_send_email, contact_payload):
        pipeline = SubmissionPipeline(definitions.CONTACT, db_session)

        result = await pipeline.submit(contact_payload)

        assert result.document is None
        assert result.record.source == "website_contact_form"
        mock_send_email.assert_called_once()
        assert mock_send_email.call_args.args[0].attachments == ()

    @pytest.mark.asyncio
    async def test_validation_failure(self, db_session, mock_send_email, contact_payload):
        contact_payload["fullName"] = ""
        contact_payload["message"] = "short"
        pipeline = SubmissionPipeline(definitions.CONTACT, db_session)

        with pytest.raises(FormValidationError) as exc_info:
            await pipeline.submit(contact_payload)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "VALIDATION_FAILED"
        assert len(exc_info.value.errors) == 2
        assert (await db_session.execute(select(ContactInquiry))).first() is None
        mock_send_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_repeated_contact_message(self, db_session, mock_send_email, contact_payload):
        pipeline = SubmissionPipeline(definitions.CONTACT, db_session)
        await pipeline.submit(contact_payload)

        with pytest.raises(RecentDuplicateError) as exc_info:
            await pipeline.submit(contact_payload)

        assert exc_info.value.status_code == 429
        assert exc_info.value.error_code == "DUPLICATE_SUBMISSION_RECENT"

    @pytest.mark.asyncio
    async def test_repeated_job_application(
        self, db_session, mock_send_email, job_application_payload
    ):
        pipeline = SubmissionPipeline(definitions.JOB_APPLICATION, db_session)
        await pipeline.submit(job_application_payload, today=TODAY)

        with pytest.raises(DuplicateSubmissionError) as exc_info:
            await pipeline.submit(job_application_payload, today=TODAY)

        assert exc_info.value.status_code == 409
        assert exc_info.value.errors == ["Duplicate application detected for this position"]

    @pytest.mark.asyncio
    async def test_repeated_availability_phone(
        self, db_session, mock_send_email, availability_payload
    ):
        pipeline = SubmissionPipeline(definitions.AVAILABILITY, db_session)
        await pipeline.submit(availability_payload)

        availability_payload["phoneNumber"] = "077 0090 0123"
        with pytest.raises(DuplicateSubmissionError) as exc_info:
            await pipeline.submit(availability_payload)

        assert exc_info.value.message == "A request with this phone number already exists"

    @pytest.mark.asyncio
    async def test_visit_booking_emails_without_document(
        self, db_session, mock_send_email, visit_booking_payload
    ):
        pipeline = SubmissionPipeline(definitions.VISIT_BOOKING, db_session)

        result = await pipeline.submit(visit_booking_payload, today=TODAY)

        assert result.document is None
        assert result.record.source == "website_booking"
        assert result.record.visit_time == "10:00 AM"
        sent = [c.args[0] for c in mock_send_email.call_args_list]
        assert [m.to for m in sent] == ["admin@nursery.test", "grace.okafor@example.com"]
        assert all(m.attachments == () for m in sent)

    @pytest.mark.asyncio
    async def test_repeated_visit_booking(self, db_session, mock_send_email, visit_booking_payload):
        pipeline = SubmissionPipeline(definitions.VISIT_BOOKING, db_session)
        await pipeline.submit(visit_booking_payload, today=TODAY)

        visit_booking_payload["email"] = "another.parent@example.com"
        with pytest.raises(DuplicateSubmissionError) as exc_info:
            await pipeline.submit(visit_booking_payload, today=TODAY)

        assert exc_info.value.status_code == 409
        assert exc_info.value.errors == ["The selected time slot is no longer available"]


class TestFailureIsolation:
    """Steps after the insert never undo it."""

    @pytest.mark.asyncio
    async def test_render_failure_skips_notifications(self, db_session, medical_payload):
        pipeline = SubmissionPipeline(definitions.MEDICAL, db_session)

        with (
            patch(
                "nursery_api.modules.submissions.service.render_document",
                side_effect=RenderError("broken layout"),
            ),
            patch("nursery_api.modules.submissions.service.notify") as mock_notify,
        ):
            result = await pipeline.submit(medical_payload, today=TODAY)

        assert result.document is None
        assert result.record.id is not None
        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_failure_still_succeeds(self, db_session, change_payload):
        pipeline = SubmissionPipeline(definitions.CHANGE, db_session)

        with patch(
            "nursery_api.modules.submissions.notifications.send_email",
            new=AsyncMock(side_effect=RuntimeError("smtp gone")),
        ):
            result = await pipeline.submit(change_payload, today=TODAY)

        assert result.record.reference.startswith("CHANGE-")


class TestUniqueConflicts:
    """A unique index rejecting the insert surfaces as a duplicate."""

    @pytest.mark.asyncio
    async def test_integrity_error_becomes_duplicate(self, mock_db, registration_payload):
        mock_db.commit = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("unique")))
        pipeline = SubmissionPipeline(definitions.REGISTRATION, mock_db)

        with (
            patch("nursery_api.modules.submissions.service.notify") as mock_notify,
            pytest.raises(DuplicateSubmissionError) as exc_info,
        ):
            await pipeline.submit(registration_payload, today=TODAY)

        assert isinstance(exc_info.value, FormServiceError)
        assert exc_info.value.status_code == 409
        mock_db.rollback.assert_called_once()
        mock_notify.assert_not_called()

    @pytest.mark.asyncio
    async def test_lost_slot_race_uses_slot_message(self, mock_db, visit_booking_payload):
        mock_db.commit = AsyncMock(side_effect=IntegrityError("INSERT", {}, Exception("unique")))
        pipeline = SubmissionPipeline(definitions.VISIT_BOOKING, mock_db)

        with (
            patch("nursery_api.modules.submissions.service.notify"),
            patch.object(SubmissionPipeline, "_check_duplicate", AsyncMock(return_value=None)),
            pytest.raises(DuplicateSubmissionError) as exc_info,
        ):
            await pipeline.submit(visit_booking_payload, today=TODAY)

        assert exc_info.value.message == "This time slot is already booked"
        assert exc_info.value.errors == ["The selected time slot is no longer available"]
