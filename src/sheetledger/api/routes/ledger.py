"""Ledger endpoints: category totals and row appends for a user's tab."""

from fastapi import APIRouter, Depends

from sheetledger.api.deps import get_ledger_service
from sheetledger.schemas.ledger import CategoryTotalResponse, MessageResponse, TransactionIn
from sheetledger.services.ledger import LedgerService

router = APIRouter(tags=["ledger"])


@router.get(
    "/fetch-data/{username}",
    response_model=list[CategoryTotalResponse],
    summary="Category totals",
    description="""
    Net amount per category for the tab named ``username``.

    Each amount is the absolute difference between the category's credits
    and debits. Rows with a blank category or a blank, zero or non-numeric
    amount are skipped.
    """,
)
async def fetch_data(
    username: str,
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> list[CategoryTotalResponse]:
    totals = await ledger_service.fetch_category_totals(username)
    return [
        CategoryTotalResponse(category=total.category, amount=float(total.amount))
        for total in totals
    ]


@router.post(
    "/sheets/{username}",
    response_model=MessageResponse,
    summary="Append transactions",
    description="Append transaction rows to the end of the tab named ``username``.",
)
async def push_data(
    username: str,
    records: list[TransactionIn],
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> MessageResponse:
    await ledger_service.push_transactions(username, records)
    return MessageResponse(message="Data added successfully")
