"""
Email Delivery

Provider-neutral outgoing message plus the transports that deliver it.

Providers (``settings.email_provider``):
- ``postmark``: single HTTPS POST of the Postmark envelope via httpx
- ``resend``: Resend SDK, run in a worker thread
- ``log``: write the message summary to the log and report success

When the selected provider has no credentials configured the message is
logged instead of sent, so local development never needs a token.
"""

import asyncio
import base64
import logging
from dataclasses import dataclass, field

import httpx
import resend

from nursery_api.core.config import settings

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a provider rejects or fails to accept a message."""


@dataclass(frozen=True)
class EmailAttachment:
    name: str
    content: bytes
    content_type: str = "application/pdf"

    @property
    def content_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    html_body: str
    text_body: str
    attachments: tuple[EmailAttachment, ...] = ()
    from_address: str = field(default_factory=lambda: settings.email_from)

    def to_postmark_payload(self) -> dict:
        """Build the provider envelope posted to Postmark's /email endpoint."""
        return {
            "From": self.from_address,
            "To": self.to,
            "Subject": self.subject,
            "HtmlBody": self.html_body,
            "TextBody": self.text_body,
            "Attachments": [
                {
                    "Name": attachment.name,
                    "Content": attachment.content_base64,
                    "ContentType": attachment.content_type,
                }
                for attachment in self.attachments
            ],
        }


def _log_message(message: EmailMessage) -> None:
    names = ", ".join(a.name for a in message.attachments) or "none"
    logger.info(f"EMAIL TO: {message.to} | SUBJECT: {message.subject} | ATTACHMENTS: {names}")


async def _send_postmark(message: EmailMessage) -> str | None:
    if not settings.postmark_server_token:
        logger.warning("POSTMARK_SERVER_TOKEN not set - logging email instead of sending")
        _log_message(message)
        return None

    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "X-Postmark-Server-Token": settings.postmark_server_token,
    }

    try:
        async with httpx.AsyncClient(timeout=settings.email_timeout_seconds) as client:
            response = await client.post(
                settings.postmark_api_url,
                json=message.to_postmark_payload(),
                headers=headers,
            )
    except httpx.HTTPError as e:
        raise NotificationError(f"Postmark request failed: {e}") from e

    if response.status_code >= 400:
        raise NotificationError(
            f"Postmark rejected message ({response.status_code}): {response.text[:200]}"
        )

    try:
        return response.json().get("MessageID")
    except (ValueError, AttributeError) as e:
        raise NotificationError(
            f"Postmark returned an unreadable response: {response.text[:200]}"
        ) from e


async def _send_resend(message: EmailMessage) -> str | None:
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set - logging email instead of sending")
        _log_message(message)
        return None

    resend.api_key = settings.resend_api_key
    params: resend.Emails.SendParams = {
        "from": message.from_address,
        "to": [message.to],
        "subject": message.subject,
        "html": message.html_body,
        "text": message.text_body,
        "attachments": [
            {"filename": attachment.name, "content": list(attachment.content)}
            for attachment in message.attachments
        ],
    }

    try:
        # Run sync Resend call in thread pool to avoid blocking event loop
        email = await asyncio.to_thread(resend.Emails.send, params)
    except Exception as e:
        raise NotificationError(f"Resend request failed: {e}") from e

    try:
        return email["id"]
    except (KeyError, TypeError) as e:
        raise NotificationError(f"Resend response had no message id: {email!r}") from e


async def send_email(message: EmailMessage) -> str | None:
    """
    Deliver a message through the configured provider.

    Returns:
        The provider message id, or None when the message was only logged

    Raises:
        NotificationError: If the provider call fails
    """
    provider = settings.email_provider.lower()

    if provider == "postmark":
        message_id = await _send_postmark(message)
    elif provider == "resend":
        message_id = await _send_resend(message)
    elif provider == "log":
        _log_message(message)
        message_id = None
    else:
        raise NotificationError(f"Unknown email provider: {settings.email_provider}")

    if message_id:
        logger.info(f"Email sent successfully to {message.to}, id: {message_id}")
    return message_id
