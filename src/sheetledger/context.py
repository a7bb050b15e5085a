"""Process-wide clients, built once at startup and handed to request handlers."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sheetledger.config import Settings
from sheetledger.db.session import build_engine, build_sessionmaker
from sheetledger.sheets import SheetsClient


@dataclass
class AppContext:
    """Database engine, session factory and Sheets client for one app instance."""

    settings: Settings
    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]
    sheets: SheetsClient

    async def close(self) -> None:
        await self.engine.dispose()


def build_context(settings: Settings) -> AppContext:
    engine = build_engine(settings)
    return AppContext(
        settings=settings,
        engine=engine,
        sessionmaker=build_sessionmaker(engine),
        sheets=SheetsClient.from_settings(settings),
    )
