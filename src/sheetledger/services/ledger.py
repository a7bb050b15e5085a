"""Reading category totals from, and appending rows to, a user's ledger tab."""

import logging
from typing import Sequence

from sheetledger.core.aggregation import CategoryTotal, aggregate_categories
from sheetledger.core.exceptions import SpreadsheetServiceError
from sheetledger.schemas.ledger import TransactionIn
from sheetledger.sheets import LEDGER_COLUMNS, SheetsClient, a1_range

logger = logging.getLogger(__name__)

# Data rows start below the header row.
CATEGORY_COLUMN = "C2:C"
AMOUNT_COLUMN = "D2:D"
TYPE_COLUMN = "E2:E"


class LedgerService:
    """Service layer over one spreadsheet's ledger tabs."""

    def __init__(self, sheets: SheetsClient):
        self.sheets = sheets

    async def fetch_category_totals(self, sheet: str) -> list[CategoryTotal]:
        """Aggregate the tab's rows into per-category net amounts.

        Raises:
            SpreadsheetServiceError: If the spreadsheet is unreachable or the
                tab does not exist
        """
        logger.info("Fetching category totals", extra={"sheet": sheet})

        titles = await self.sheets.verify_access()
        if sheet not in titles:
            raise SpreadsheetServiceError(details={"sheet": sheet, "reason": "sheet not found"})

        categories, amounts, types = await self.sheets.read_columns(
            [
                a1_range(sheet, CATEGORY_COLUMN),
                a1_range(sheet, AMOUNT_COLUMN),
                a1_range(sheet, TYPE_COLUMN),
            ]
        )
        totals = aggregate_categories(categories, amounts, types)

        logger.info(
            f"Fetched {len(totals)} category totals from {len(categories)} rows",
            extra={"sheet": sheet},
        )
        return totals

    async def push_transactions(self, sheet: str, records: Sequence[TransactionIn]) -> int:
        """Append records to the end of the tab.

        Returns:
            Number of rows written. An empty batch writes nothing.
        """
        if not records:
            logger.info("No rows to append", extra={"sheet": sheet})
            return 0

        rows = [record.to_row() for record in records]
        written = await self.sheets.append_rows(a1_range(sheet, LEDGER_COLUMNS), rows)

        logger.info(f"Appended {len(rows)} rows", extra={"sheet": sheet})
        return written
