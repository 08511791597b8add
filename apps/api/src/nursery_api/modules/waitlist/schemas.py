"""
Waitlist Schemas

Response payloads for joining the waitlist and checking a position.
"""

from datetime import datetime
from uuid import UUID

from nursery_api.core.responses import CamelModel


class WaitlistJoinData(CamelModel):
    id: UUID
    reference: str
    position: int
    estimated_wait_time: str
    submitted_at: datetime


class WaitlistStatusData(CamelModel):
    reference: str
    position: int
    estimated_wait_time: str
    joined_at: datetime
    status: str
