"""
Core module - Configuration, database, email, scheduling, and utilities.
"""

from nursery_api.core.config import get_settings, settings
from nursery_api.core.database import Base, Database, close_db, database, get_db, init_db
from nursery_api.core.redis import close_redis, init_redis, redis_status

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "Database",
    "database",
    "get_db",
    "init_db",
    "close_db",
    # Redis
    "redis_status",
    "init_redis",
    "close_redis",
]
