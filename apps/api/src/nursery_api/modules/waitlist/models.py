"""
Waitlist Models

A family's place in the queue for a nursery place. Position is stored as it
was at join time; the live position is recomputed from ``created_at``
ordering among active entries.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from nursery_api.core.database import Base
from nursery_api.modules.submissions.models import SubmissionMixin


class WaitlistStatus:
    ACTIVE = "active"
    CONTACTED = "contacted"
    ENROLLED = "enrolled"
    REMOVED = "removed"


class WaitlistEntry(SubmissionMixin, Base):
    """One family on the waitlist."""

    __tablename__ = "waitlist_entries"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(30), nullable=False)
    phone_normalized: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    children_details: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # Position when the family joined; informational only
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    contacted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_waitlist_entries_status_created_at", "status", "created_at"),)
