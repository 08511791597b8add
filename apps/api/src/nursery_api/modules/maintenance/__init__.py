"""
Maintenance Module

API Endpoints:
- GET /cron/keep-alive - Bearer-authenticated store ping for external cron

Background Jobs (via APScheduler):
- store_keep_alive: pings the store every keep_alive_interval_hours
"""

from .jobs import register_maintenance_jobs
from .router import router

__all__ = ["router", "register_maintenance_jobs"]
