"""
Notification Dispatcher

Turns a persisted submission into its two emails (staff, then submitter)
and delivers them off the request path.

Delivery is best-effort:
- jobs go onto a bounded asyncio.Queue drained by background workers started
  in the application lifespan; with no workers running they are delivered
  inline instead
- each message is retried with linear back-off, and a message that still
  fails is logged without affecting the other one
- a full queue drops the job with an error log
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from nursery_api.core.config import settings
from nursery_api.core.email import EmailAttachment, EmailMessage, NotificationError, send_email
from nursery_api.modules.submissions.definitions import FormDefinition
from nursery_api.modules.submissions.templates import admin_email, submitter_email

logger = logging.getLogger(__name__)

Sender = Callable[[EmailMessage], Awaitable[str | None]]


@dataclass(frozen=True)
class NotificationJob:
    reference: str
    messages: tuple[EmailMessage, ...]


def compose_messages(
    definition: FormDefinition,
    form: Any,
    reference: str,
    submitted_at: datetime,
    document: bytes | None = None,
) -> tuple[EmailMessage, ...]:
    """
    Build the staff message and, when the form captured an email address,
    the submitter confirmation.
    """
    primary_name = definition.primary_name(form)
    has_attachment = document is not None

    html, text = admin_email(
        form_label=definition.label,
        reference=reference,
        primary_name=primary_name,
        submitted_at=submitted_at.strftime("%d/%m/%Y %H:%M"),
        additional_info=definition.additional_info(form),
        alert_message=definition.alert(form),
        has_attachment=has_attachment,
    )
    admin_attachments = ()
    if has_attachment:
        admin_attachments = (
            EmailAttachment(name=f"{definition.attachment_label}_{reference}.pdf", content=document),
        )
    messages = [
        EmailMessage(
            to=definition.admin_recipient(),
            subject=definition.admin_subject(form, reference),
            html_body=html,
            text_body=text,
            attachments=admin_attachments,
        )
    ]

    recipient = definition.submitter_address(form)
    if recipient is None:
        logger.info(f"No submitter email on {reference} - sending staff notification only")
        return tuple(messages)

    html, text = submitter_email(
        recipient_name=primary_name,
        form_label=definition.label,
        reference=reference,
        subject_name=definition.subject_name(form),
        next_steps=definition.next_steps,
        custom_message=definition.custom_message(form) if definition.custom_message else None,
        reminder=definition.reminder,
        has_attachment=has_attachment,
    )
    submitter_attachments = ()
    if has_attachment:
        submitter_attachments = (
            EmailAttachment(
                name=f"Your_{definition.attachment_label}_{reference}.pdf", content=document
            ),
        )
    subject = (
        definition.submitter_subject(form)
        if definition.submitter_subject
        else f"{definition.label} Received - {reference}"
    )
    messages.append(
        EmailMessage(
            to=recipient,
            subject=subject,
            html_body=html,
            text_body=text,
            attachments=submitter_attachments,
        )
    )
    return tuple(messages)


class NotificationDispatcher:
    """Bounded background delivery of notification jobs."""

    def __init__(
        self,
        sender: Sender | None = None,
        queue_size: int | None = None,
        workers: int | None = None,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
    ):
        self._sender = sender
        self.queue_size = queue_size if queue_size is not None else settings.notification_queue_size
        self.worker_count = workers if workers is not None else settings.notification_workers
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.notification_max_attempts
        )
        self.retry_delay = (
            retry_delay if retry_delay is not None else settings.notification_retry_delay_seconds
        )
        self._queue: asyncio.Queue[NotificationJob] | None = None
        self._workers: list[asyncio.Task] = []

    @property
    def sender(self) -> Sender:
        # Resolved late so tests can patch the module-level send_email
        return self._sender or send_email

    @property
    def is_running(self) -> bool:
        return bool(self._workers)

    async def start(self) -> None:
        if self.is_running:
            return
        self._queue = asyncio.Queue(maxsize=self.queue_size)
        self._workers = [
            asyncio.create_task(self._worker(i), name=f"notification-worker-{i}")
            for i in range(self.worker_count)
        ]
        logger.info(f"Notification dispatcher started with {self.worker_count} worker(s)")

    async def stop(self, timeout: float = 10.0) -> None:
        """Drain queued jobs (up to ``timeout`` seconds) and stop the workers."""
        if not self.is_running:
            return

        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                f"Notification queue not drained after {timeout}s - "
                f"{self._queue.qsize()} job(s) dropped"
            )

        for task in self._workers:
            task.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        self._queue = None
        logger.info("Notification dispatcher stopped")

    async def submit(self, job: NotificationJob) -> bool:
        """
        Hand a job to the workers, or deliver it inline when none are running.

        Returns:
            False if the job was dropped because the queue is full
        """
        if not self.is_running:
            await self.deliver(job)
            return True

        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull:
            logger.error(f"Notification queue full - dropping notifications for {job.reference}")
            return False
        return True

    async def deliver(self, job: NotificationJob) -> None:
        # Each message stands alone: a staff failure must not block the submitter copy
        for message in job.messages:
            try:
                await self._send_with_retry(message, job.reference)
            except Exception:
                logger.exception(f"Unexpected error sending email to {message.to} for {job.reference}")

    async def _send_with_retry(self, message: EmailMessage, reference: str) -> bool:
        for attempt in range(1, self.max_attempts + 1):
            try:
                await self.sender(message)
                return True
            except NotificationError as e:
                if attempt == self.max_attempts:
                    logger.error(
                        f"Giving up on email to {message.to} for {reference} "
                        f"after {attempt} attempt(s): {e}"
                    )
                    return False
                logger.warning(
                    f"Email to {message.to} for {reference} failed "
                    f"(attempt {attempt}/{self.max_attempts}): {e}"
                )
                await asyncio.sleep(self.retry_delay * attempt)
        return False

    async def _worker(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.deliver(job)
            except Exception:
                logger.exception(f"Notification worker {index} failed on {job.reference}")
            finally:
                self._queue.task_done()


dispatcher = NotificationDispatcher()


async def notify(
    definition: FormDefinition,
    form: Any,
    reference: str,
    submitted_at: datetime,
    document: bytes | None = None,
) -> None:
    """Queue the notifications for a submission. Never raises."""
    try:
        messages = compose_messages(definition, form, reference, submitted_at, document)
        await dispatcher.submit(NotificationJob(reference=reference, messages=messages))
    except Exception:
        logger.exception(f"Failed to dispatch notifications for {reference}")
