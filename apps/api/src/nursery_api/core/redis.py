"""
Redis Connection

Optional shared backend for the public endpoint throttle. Nothing else is
stored in Redis, so the API keeps working without it: ``redis_client`` stays
None and callers fall back to in-process state.
"""

import logging

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from nursery_api.core.config import settings

logger = logging.getLogger(__name__)

# Set by init_redis() once a ping succeeds
redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Connect to ``settings.redis_url`` and publish the client.

    Raises:
        RedisError: If the server cannot be reached; ``redis_client`` is left unset
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.redis_timeout_seconds,
        socket_timeout=settings.redis_timeout_seconds,
    )
    try:
        await client.ping()
    except RedisError:
        await client.aclose()
        raise
    redis_client = client
    return redis_client


async def redis_status() -> str:
    """Readiness label: ``connected``, ``unreachable`` or ``not configured``."""
    if redis_client is None:
        return "not configured"
    try:
        await redis_client.ping()
    except RedisError as e:
        logger.warning(f"Redis ping failed during readiness check: {e}")
        return "unreachable"
    return "connected"


async def close_redis() -> None:
    global redis_client
    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
