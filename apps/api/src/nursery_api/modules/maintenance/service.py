"""
Store Maintenance

Keeps the hosted database from being paused for inactivity by running a
trivial query on a schedule.
"""

import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime

from nursery_api.core.database import Database, database

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PingResult:
    ok: bool
    checked_at: datetime
    duration_ms: float
    error: str | None = None


async def ping_store(db: Database = database) -> PingResult:
    """Ping the store. Failures are reported in the result, not raised."""
    started = time.perf_counter()
    checked_at = datetime.now(UTC)

    try:
        ok = await db.ping()
    except Exception as e:
        duration_ms = (time.perf_counter() - started) * 1000
        logger.error(f"Store keep-alive ping failed after {duration_ms:.0f}ms: {e}")
        return PingResult(ok=False, checked_at=checked_at, duration_ms=duration_ms, error=str(e))

    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(f"Store keep-alive ping {'succeeded' if ok else 'returned no row'} in {duration_ms:.0f}ms")
    return PingResult(ok=ok, checked_at=checked_at, duration_ms=duration_ms)
