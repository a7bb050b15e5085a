"""Google Sheets ledger storage."""

from .client import HEADER_ROW, LEDGER_COLUMNS, SheetsClient, a1_range

__all__ = ["HEADER_ROW", "LEDGER_COLUMNS", "SheetsClient", "a1_range"]
