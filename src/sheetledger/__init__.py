"""SheetLedger: user accounts plus a Google Sheets backed transaction ledger."""

__version__ = "0.1.0"
