"""
Submission Service Layer

The intake pipeline shared by every form:

1. Validate the raw body (all errors collected)
2. Apply the form's duplicate rule against persisted records
3. Assign the reference and persist the record
4. Render the PDF record in a worker thread
5. Queue the staff and submitter notifications

Persistence is the commit point. A render failure is logged and skips the
notifications, and a notification failure never reaches the caller; neither
undoes the stored record.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nursery_api.modules.submissions.definitions import FormDefinition
from nursery_api.modules.submissions.documents import RenderError, Row, render_document
from nursery_api.modules.submissions.notifications import notify
from nursery_api.modules.submissions.references import generate_reference
from nursery_api.modules.submissions.store import SubmissionStore
from nursery_api.modules.submissions.validation import validate

logger = logging.getLogger(__name__)


class FormServiceError(Exception):
    """Base exception for form service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        errors: list[str] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class FormValidationError(FormServiceError):
    """Raised when a submission fails its rule set."""

    def __init__(self, message: str, errors: list[str]):
        super().__init__(
            message=message,
            error_code="VALIDATION_FAILED",
            status_code=400,
            errors=errors,
        )


class DuplicateSubmissionError(FormServiceError):
    """Raised when a submission matches an existing record."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(
            message=message,
            error_code="DUPLICATE_SUBMISSION",
            status_code=409,
            errors=errors,
        )


class RecentDuplicateError(FormServiceError):
    """Raised when the same submission is repeated inside its cool-down window."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(
            message=message,
            error_code="DUPLICATE_SUBMISSION_RECENT",
            status_code=429,
            errors=errors,
        )


@dataclass(frozen=True)
class SubmissionResult:
    record: Any
    form: Any
    message: str
    document: bytes | None


class SubmissionPipeline:
    """
    Runs one submission through the intake steps for its form definition.

    Subclasses customise the hooks (``prepare``, ``success_message``,
    ``document_rows``, ``notification_definition``) rather than the flow.
    """

    def __init__(self, definition: FormDefinition, db: AsyncSession):
        self.definition = definition
        self.db = db
        self.store = SubmissionStore(db, definition.model)

    # ---- hooks ----

    async def prepare(self, form: Any) -> dict[str, Any]:
        """Extra column values computed just before insert."""
        return {}

    def success_message(self, form: Any, record: Any) -> str:
        return self.definition.success_message(form)

    def document_rows(self, record: Any) -> list[Row]:
        return []

    def notification_definition(self, record: Any) -> FormDefinition:
        return self.definition

    # ---- flow ----

    async def submit(
        self,
        raw: Any,
        user_agent: str | None = None,
        today: date | None = None,
    ) -> SubmissionResult:
        """
        Validate, de-duplicate, persist, render and notify.

        Raises:
            FormValidationError: If any rule fails
            DuplicateSubmissionError: If the form's duplicate rule or a
                unique index rejects the submission
            RecentDuplicateError: If the submission repeats one inside its
                cool-down window
        """
        definition = self.definition
        label = definition.form_type.value

        result = validate(definition.form_type, raw, today=today)
        if not result.is_valid:
            logger.info(f"Rejected {label} submission with {len(result.errors)} validation error(s)")
            raise FormValidationError(definition.invalid_message, result.errors)
        form = result.form

        now = datetime.now(UTC)
        await self._check_duplicate(form, now)

        extra = await self.prepare(form)
        reference = generate_reference(definition.prefix)
        record = definition.model(
            **form.model_dump(exclude={"form_type"}),
            **extra,
            reference=reference,
            status=definition.status,
            created_at=now,
            updated_at=now,
            user_agent=user_agent or "unknown",
            source=definition.source,
        )

        try:
            await self.store.insert(record)
        except IntegrityError:
            logger.warning(f"Unique constraint rejected {label} submission {reference}")
            raise DuplicateSubmissionError(
                definition.conflict_message, definition.conflict_errors
            ) from None

        logger.info(f"Stored {label} submission {record.id} ({reference})")

        document = None
        if definition.renders_document:
            document = await self._render(form, reference, now, record)
            if document is None:
                return SubmissionResult(record, form, self.success_message(form, record), None)

        await notify(self.notification_definition(record), form, reference, now, document)
        return SubmissionResult(record, form, self.success_message(form, record), document)

    async def _check_duplicate(self, form: Any, now: datetime) -> None:
        guard = self.definition.duplicate_guard
        if guard is None:
            return

        duplicate = await guard(self.store, form, now)
        if duplicate is None:
            return

        logger.warning(
            f"Duplicate {self.definition.form_type.value} submission rejected "
            f"({duplicate.status_code})"
        )
        if duplicate.status_code == 429:
            raise RecentDuplicateError(duplicate.message, duplicate.errors)
        raise DuplicateSubmissionError(duplicate.message, duplicate.errors)

    async def _render(
        self, form: Any, reference: str, submitted_at: datetime, record: Any
    ) -> bytes | None:
        try:
            return await asyncio.to_thread(
                render_document,
                self.definition.form_type,
                form,
                reference,
                submitted_at,
                self.document_rows(record),
            )
        except RenderError as e:
            logger.error(f"Skipping notifications for {reference}: {e}")
            return None
