"""Base repository with generic persistence operations."""
from typing import Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from sheetledger.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository staging records and controlling the transaction."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def add(self, obj: T) -> T:
        """Stage a new record and flush it without committing."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
