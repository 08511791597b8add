"""
Submission Store

Append-only persistence over one submission table. The pipeline only ever
inserts, looks up one record, or counts records; submissions are never
updated or deleted from here.

Design Principles:
- All queries are parameterized (no SQL injection)
- Async operations for non-blocking I/O
- Single responsibility - only database operations, no business logic
"""

import uuid
from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from nursery_api.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class SubmissionStore(Generic[ModelT]):
    """Insert / find-one / count over the table mapped by ``model``."""

    def __init__(self, db: AsyncSession, model: type[ModelT]):
        self.db = db
        self.model = model

    async def insert(self, record: ModelT) -> uuid.UUID:
        """
        Persist a new record and return its generated id.

        Raises:
            IntegrityError: If a unique constraint rejects the record; the
                session is rolled back before re-raising
        """
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(record)
        return record.id

    async def find_one(self, *criteria: ColumnElement[bool]) -> ModelT | None:
        result = await self.db.execute(select(self.model).where(*criteria).limit(1))
        return result.scalar_one_or_none()

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        query = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        result = await self.db.execute(query)
        return result.scalar_one()
