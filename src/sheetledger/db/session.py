from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sheetledger.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    # Do not log SQL statement parameters outside development: they include
    # usernames and password hashes.
    return create_async_engine(
        settings.database_url,
        echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
        future=True,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.context.sessionmaker() as session:
        yield session
