"""
Unit tests for notification composition and delivery.

These tests cover:
- Staff message first, submitter confirmation second
- Attachment names and the no-email path
- Retry with back-off and giving up
- Queued delivery and dropping on a full queue
"""

import asyncio
import dataclasses
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from nursery_api.core.email import EmailMessage, NotificationError
from nursery_api.modules.submissions import definitions
from nursery_api.modules.submissions.models import FormType
from nursery_api.modules.submissions.notifications import (
    NotificationDispatcher,
    NotificationJob,
    compose_messages,
    notify,
)

SUBMITTED_AT = datetime(2026, 6, 15, 9, 30, tzinfo=UTC)
PDF = b"%PDF-1.4 test"


def _message(to: str = "someone@example.com") -> EmailMessage:
    return EmailMessage(to=to, subject="Subject", html_body="<p>Hi</p>", text_body="Hi")


class TestComposeMessages:
    """Tests for compose_messages."""

    def test_staff_then_submitter(self, validated, medical_payload):
        form = validated(FormType.MEDICAL, medical_payload)

        admin, submitter = compose_messages(
            definitions.MEDICAL, form, "MED-1-ABCD", SUBMITTED_AT, PDF
        )

        assert admin.to == "admin@nursery.test"
        assert admin.subject == "New Medical Form - Ada Okafor - MED-1-ABCD"
        assert admin.attachments[0].name == "Medical_Form_MED-1-ABCD.pdf"
        assert admin.attachments[0].content == PDF
        assert "Attention: this child has reported allergies" in admin.text_body

        assert submitter.to == "grace@example.com"
        assert submitter.subject == "Medical Form Received - Ada Okafor"
        assert submitter.attachments[0].name == "Your_Medical_Form_MED-1-ABCD.pdf"
        assert "Dear Grace Okafor" in submitter.text_body

    def test_job_application_goes_to_hr(self, validated, job_application_payload):
        form = validated(FormType.JOB_APPLICATION, job_application_payload)

        admin, submitter = compose_messages(
            definitions.JOB_APPLICATION, form, "JOB-1-ABCD", SUBMITTED_AT, PDF
        )

        assert admin.to == "hr@nursery.test"
        assert admin.subject == "New Job Application - Nursery Practitioner - JOB-1-ABCD"
        assert submitter.to == "samuel.mensah@example.com"
        assert submitter.subject == "Application Received - Nursery Practitioner Position"
        assert "Thank you for applying for the Nursery Practitioner position." in (
            submitter.text_body
        )

    def test_no_submitter_email_sends_staff_only(self, validated, contact_payload):
        form = validated(FormType.CONTACT, contact_payload)

        messages = compose_messages(definitions.CONTACT, form, "INQ-1-ABCD", SUBMITTED_AT)

        assert len(messages) == 1
        assert messages[0].to == "admin@nursery.test"
        assert messages[0].attachments == ()
        assert contact_payload["message"] in messages[0].text_body

    def test_default_submitter_subject(self, validated, consent_payload):
        form = validated(FormType.CONSENT, consent_payload)
        definition = dataclasses.replace(definitions.CONSENT, submitter_subject=None)

        _admin, submitter = compose_messages(definition, form, "CONSENT-1-ABCD", SUBMITTED_AT)

        assert submitter.subject == "Consent Form Received - CONSENT-1-ABCD"


class TestDispatcherDelivery:
    """Inline delivery and retries."""

    @pytest.mark.asyncio
    async def test_delivers_each_message_in_order(self):
        sender = AsyncMock(return_value="id")
        dispatcher = NotificationDispatcher(sender=sender, retry_delay=0)
        job = NotificationJob("REF-1", (_message("staff@x.test"), _message("parent@x.test")))

        assert await dispatcher.submit(job) is True

        assert [c.args[0].to for c in sender.call_args_list] == ["staff@x.test", "parent@x.test"]

    @pytest.mark.asyncio
    async def test_retries_then_succeeds(self):
        sender = AsyncMock(side_effect=[NotificationError("timeout"), "id"])
        dispatcher = NotificationDispatcher(sender=sender, max_attempts=3, retry_delay=0)

        await dispatcher.deliver(NotificationJob("REF-1", (_message(),)))

        assert sender.call_count == 2

    @pytest.mark.asyncio
    async def test_staff_failure_does_not_block_submitter(self):
        """A message that exhausts its attempts is dropped; the next one is still sent."""
        sender = AsyncMock(
            side_effect=[NotificationError("down"), NotificationError("down"), "id"]
        )
        dispatcher = NotificationDispatcher(sender=sender, max_attempts=2, retry_delay=0)
        job = NotificationJob("REF-1", (_message("staff@x.test"), _message("parent@x.test")))

        await dispatcher.deliver(job)

        assert sender.call_count == 3
        assert sender.call_args_list[-1].args[0].to == "parent@x.test"

    @pytest.mark.asyncio
    async def test_unexpected_staff_error_does_not_block_submitter(self):
        sender = AsyncMock(side_effect=[ValueError("bad provider json"), "id"])
        dispatcher = NotificationDispatcher(sender=sender, retry_delay=0)
        job = NotificationJob("REF-1", (_message("staff@x.test"), _message("parent@x.test")))

        await dispatcher.deliver(job)

        assert [c.args[0].to for c in sender.call_args_list] == ["staff@x.test", "parent@x.test"]


class TestDispatcherQueue:
    """Background workers and the bounded queue."""

    @pytest.mark.asyncio
    async def test_workers_drain_queue_on_stop(self):
        sender = AsyncMock(return_value="id")
        dispatcher = NotificationDispatcher(sender=sender, workers=2, retry_delay=0)
        await dispatcher.start()

        for i in range(5):
            await dispatcher.submit(NotificationJob(f"REF-{i}", (_message(),)))
        await dispatcher.stop()

        assert sender.call_count == 5
        assert not dispatcher.is_running

    @pytest.mark.asyncio
    async def test_full_queue_drops_job(self):
        release = asyncio.Event()

        async def slow_sender(_message):
            await release.wait()
            return "id"

        dispatcher = NotificationDispatcher(
            sender=slow_sender, queue_size=1, workers=1, retry_delay=0
        )
        await dispatcher.start()

        assert await dispatcher.submit(NotificationJob("REF-1", (_message(),)))
        await asyncio.sleep(0)  # worker picks up the first job
        assert await dispatcher.submit(NotificationJob("REF-2", (_message(),)))
        assert await dispatcher.submit(NotificationJob("REF-3", (_message(),))) is False

        release.set()
        await dispatcher.stop()

    @pytest.mark.asyncio
    async def test_worker_survives_unexpected_error(self):
        sender = AsyncMock(side_effect=[RuntimeError("bug"), "id"])
        dispatcher = NotificationDispatcher(sender=sender, workers=1, retry_delay=0)
        await dispatcher.start()

        await dispatcher.submit(NotificationJob("REF-1", (_message(),)))
        await dispatcher.submit(NotificationJob("REF-2", (_message(),)))
        await dispatcher.stop()

        assert sender.call_count == 2


class TestNotify:
    """notify never raises into the request path."""

    @pytest.mark.asyncio
    async def test_sends_through_module_transport(self, mock_send_email, validated, change_payload):
        form = validated(FormType.CHANGE, change_payload)

        await notify(definitions.CHANGE, form, "CHANGE-1-ABCD", SUBMITTED_AT, PDF)

        assert mock_send_email.call_count == 2

    @pytest.mark.asyncio
    async def test_composition_error_is_swallowed(self, mock_send_email, validated, change_payload):
        form = validated(FormType.CHANGE, change_payload)
        broken = dataclasses.replace(definitions.CHANGE, additional_info=lambda _form: 1 / 0)

        await notify(broken, form, "CHANGE-1-ABCD", SUBMITTED_AT, PDF)

        mock_send_email.assert_not_called()
