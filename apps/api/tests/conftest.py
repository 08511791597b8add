"""
Shared fixtures.

The environment is pinned before any application module is imported so the
process-wide settings point at an in-memory SQLite store, the log-only email
provider and no Redis.
"""

import os

os.environ.update(
    {
        "PYTHON_ENV": "test",
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "REDIS_URL": "",
        "EMAIL_PROVIDER": "log",
        "ADMIN_EMAIL": "admin@nursery.test",
        "HR_EMAIL": "hr@nursery.test",
        "CRON_SECRET": "test-cron-secret",
        "KEEP_ALIVE_INTERVAL_HOURS": "0",
        "NOTIFICATION_RETRY_DELAY_SECONDS": "0",
        "RATE_LIMIT_PER_MINUTE": "20",
    }
)

from unittest.mock import AsyncMock, MagicMock, patch  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from nursery_api.core.database import Database  # noqa: E402
from nursery_api.core.rate_limit import reset_memory_store  # noqa: E402
from nursery_api.main import app  # noqa: E402
from nursery_api.modules.submissions import dispatcher  # noqa: E402


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Each test starts with an empty in-memory throttle."""
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest_asyncio.fixture
async def db_session():
    """A session on a fresh in-memory SQLite store with every table created."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.create_all()
    session = await database.session()
    try:
        yield session
    finally:
        await session.close()
        await database.close()


@pytest.fixture
def mock_send_email():
    """Replace the email transport used by the notification dispatcher."""
    with patch(
        "nursery_api.modules.submissions.notifications.send_email",
        new=AsyncMock(return_value="message-id"),
    ) as mock:
        yield mock


@pytest.fixture
def client(mock_send_email):
    """
    HTTP client running the full application lifespan.

    Shutting the lifespan down disposes the in-memory store, so every test
    gets empty tables. The dispatcher workers are not started, so
    notifications are delivered inline before the response returns.
    """
    with patch.object(dispatcher, "start", new=AsyncMock()):
        with TestClient(app) as test_client:
            yield test_client
