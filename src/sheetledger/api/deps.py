"""FastAPI dependency injection for services and external clients."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sheetledger.db.session import get_db
from sheetledger.repositories.user import UserRepository
from sheetledger.services.auth import AuthService
from sheetledger.services.ledger import LedgerService
from sheetledger.sheets import SheetsClient


def get_sheets_client(request: Request) -> SheetsClient:
    """Sheets client built at startup and held on the app context."""
    return request.app.state.context.sheets


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    sheets: SheetsClient = Depends(get_sheets_client),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository
        sheets: Spreadsheet client

    Returns:
        AuthService instance
    """
    return AuthService(user_repo, sheets)


async def get_ledger_service(
    sheets: SheetsClient = Depends(get_sheets_client),
) -> LedgerService:
    return LedgerService(sheets)
