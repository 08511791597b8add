"""
Maintenance Background Jobs

Schedule:
- store_keep_alive pings the database every ``keep_alive_interval_hours``
  (default 240, i.e. every 10 days); 0 disables the in-process job and
  leaves it to the external cron endpoint

The job can also be triggered manually via the debug job endpoints.
"""

import logging
from typing import Any

from apscheduler.triggers.interval import IntervalTrigger

from nursery_api.core.config import settings
from nursery_api.core.scheduler import register_job
from nursery_api.modules.maintenance.service import ping_store

logger = logging.getLogger(__name__)

JOB_ID_STORE_KEEP_ALIVE = "store_keep_alive"


async def store_keep_alive() -> dict[str, Any]:
    result = await ping_store()
    summary = {
        "ok": result.ok,
        "checked_at": result.checked_at.isoformat(),
        "duration_ms": round(result.duration_ms, 1),
    }
    if result.error:
        summary["error"] = result.error
    return summary


def register_maintenance_jobs() -> None:
    """Register maintenance jobs with the scheduler. Call during application startup."""
    hours = settings.keep_alive_interval_hours
    if hours <= 0:
        logger.info("Store keep-alive job disabled (keep_alive_interval_hours=0)")
        return

    register_job(
        job_id=JOB_ID_STORE_KEEP_ALIVE,
        func=store_keep_alive,
        trigger=IntervalTrigger(hours=hours),
    )
    logger.info(f"Maintenance jobs registered (keep-alive every {hours}h)")
