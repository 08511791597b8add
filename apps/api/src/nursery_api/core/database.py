"""
Database Configuration

Async SQLAlchemy engine and session management.

The engine is owned by an explicitly constructed ``Database`` handle. It connects
lazily on first use; concurrent first callers share a single connect attempt
(guarded by an asyncio.Lock), and the engine is then reused for the life of the
process until ``close()`` is called from the application lifespan.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from nursery_api.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Lazily connected store handle."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_maker: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> async_sessionmaker[AsyncSession]:
        """
        Create the engine and session factory if not already created.

        Safe to call from many coroutines at once: only the first caller
        builds the engine, the others wait on the lock and reuse it.
        """
        if self._session_maker is not None:
            return self._session_maker

        async with self._lock:
            if self._session_maker is None:
                logger.info("Creating database engine")
                engine_kwargs: dict = {"echo": self.echo}
                if self.url.startswith("sqlite"):
                    # Single shared connection so in-memory databases outlive a session
                    engine_kwargs["poolclass"] = StaticPool
                    engine_kwargs["connect_args"] = {"check_same_thread": False}
                else:
                    engine_kwargs["pool_pre_ping"] = True
                self._engine = create_async_engine(self.url, **engine_kwargs)
                self._session_maker = async_sessionmaker(
                    self._engine,
                    expire_on_commit=False,
                    autoflush=False,
                )

        return self._session_maker

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    async def session(self) -> AsyncSession:
        session_maker = await self.connect()
        return session_maker()

    async def create_all(self) -> None:
        """Create all tables (development and tests; production uses Alembic)."""
        await self.connect()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run a trivial query to keep the store awake. Raises on failure."""
        await self.connect()
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1

    async def close(self) -> None:
        async with self._lock:
            if self._engine is not None:
                await self._engine.dispose()
                logger.info("Database engine disposed")
            self._engine = None
            self._session_maker = None


database = Database(settings.database_url, echo=settings.database_echo)


async def init_db() -> None:
    """Connect the process-wide database handle. Call on application startup."""
    await database.connect()
    await database.ping()


async def close_db() -> None:
    await database.close()


async def get_db() -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding a session bound to the process-wide handle.

    Usage:
        @router.post("")
        async def submit(db: AsyncSession = Depends(get_db)):
            ...
    """
    session = await database.session()
    try:
        yield session
    finally:
        await session.close()
