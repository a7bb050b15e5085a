"""Google Sheets v4 access for the per-user ledger tabs.

All tabs live in one spreadsheet (``SHEET_ID``). Each user owns one tab whose
columns are ``Date | Detail | Category | Amount | Type``.

The googleapiclient stack is synchronous; the async methods run each call in
the threadpool with its own ``httplib2.Http`` (which is not thread-safe) and
an explicit socket timeout. Calls are never retried.
"""

import logging
import threading
from typing import Any, Optional, Sequence

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from starlette.concurrency import run_in_threadpool

from sheetledger.config import Settings
from sheetledger.core.exceptions import SpreadsheetServiceError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

HEADER_ROW = ["Date", "Detail", "Category", "Amount", "Type"]
LEDGER_COLUMNS = "A:E"


def a1_range(sheet: str, cells: str) -> str:
    """Build an A1 range for a tab, quoting the title.

    Quoting is always valid and required for titles with spaces or
    punctuation. Embedded single quotes are doubled.

    >>> a1_range("Jane's ledger", "C2:C")
    "'Jane''s ledger'!C2:C"
    """
    escaped = sheet.replace("'", "''")
    return f"'{escaped}'!{cells}"


class SheetsClient:
    """Spreadsheet service bound to one spreadsheet.

    Args:
        spreadsheet_id: ID of the spreadsheet holding all ledger tabs.
        service_account_file: Path to the service-account JSON key. Loaded
            on first use.
        timeout: Socket timeout in seconds for each API call.
        service: Prebuilt Sheets API resource. When given, no credentials
            are loaded and calls use the resource's own transport.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        service_account_file: Optional[str] = None,
        timeout: int = 30,
        service: Any = None,
    ) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.service_account_file = service_account_file
        self.timeout = timeout
        self._service = service
        self._credentials: Any = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsClient":
        return cls(
            spreadsheet_id=settings.sheet_id,
            service_account_file=settings.google_service_account_file,
            timeout=settings.sheets_timeout_seconds,
        )

    def _get_service(self) -> Any:
        with self._lock:
            if self._service is not None:
                return self._service
            try:
                self._credentials = service_account.Credentials.from_service_account_file(
                    self.service_account_file, scopes=SCOPES
                )
                self._service = build(
                    "sheets",
                    "v4",
                    http=self._authorized_http(),
                    cache_discovery=False,
                )
            except (OSError, ValueError, GoogleAuthError) as ex:
                logger.error(
                    "Could not build Google Sheets service client",
                    extra={"error_type": type(ex).__name__},
                )
                raise SpreadsheetServiceError(details={"action": "build"}) from ex
            logger.debug("Google Sheets service client created.")
            return self._service

    def _authorized_http(self) -> google_auth_httplib2.AuthorizedHttp:
        return google_auth_httplib2.AuthorizedHttp(
            self._credentials, http=httplib2.Http(timeout=self.timeout)
        )

    def _execute(self, request: Any, action: str) -> Any:
        kwargs = {"http": self._authorized_http()} if self._credentials is not None else {}
        try:
            return request.execute(**kwargs)
        except HttpError as ex:
            stat = getattr(ex.resp, "status", None)
            logger.error(
                f"Sheets API {action} failed (HTTP {stat})",
                extra={"error_type": type(ex).__name__},
            )
            raise SpreadsheetServiceError(details={"action": action, "status": stat}) from ex
        # Socket timeouts and SSL failures are OSErrors.
        except (OSError, httplib2.HttpLib2Error, GoogleAuthError) as ex:
            logger.error(
                f"Sheets API {action} failed",
                extra={"error_type": type(ex).__name__},
            )
            raise SpreadsheetServiceError(details={"action": action}) from ex

    # Blocking calls

    def sheet_titles(self) -> list[str]:
        """Return the titles of every tab in the spreadsheet."""
        service = self._get_service()
        result = self._execute(
            service.spreadsheets().get(
                spreadsheetId=self.spreadsheet_id,
                fields="sheets(properties(title))",
            ),
            "get",
        )
        if not result:
            raise SpreadsheetServiceError(details={"action": "get", "reason": "empty response"})
        return [
            s.get("properties", {}).get("title", "")
            for s in result.get("sheets", [])
        ]

    def add_sheet(self, title: str) -> None:
        service = self._get_service()
        body = {"requests": [{"addSheet": {"properties": {"title": title}}}]}
        self._execute(
            service.spreadsheets().batchUpdate(spreadsheetId=self.spreadsheet_id, body=body),
            "batchUpdate",
        )
        logger.info("Created sheet", extra={"sheet": title})

    def append(self, range_spec: str, rows: Sequence[Sequence[Any]]) -> int:
        """Append rows below the last non-empty row of ``range_spec``.

        Returns:
            Number of rows the API reports as written.
        """
        service = self._get_service()
        result = self._execute(
            service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=range_spec,
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": [list(row) for row in rows]},
            ),
            "append",
        )
        return (result or {}).get("updates", {}).get("updatedRows", 0)

    def batch_get(self, ranges: Sequence[str]) -> list[list[list[Any]]]:
        """Read several ranges in one request.

        Returns:
            One list of rows per requested range, in request order. Ranges
            with no values come back as empty lists.
        """
        service = self._get_service()
        result = self._execute(
            service.spreadsheets().values().batchGet(
                spreadsheetId=self.spreadsheet_id,
                ranges=list(ranges),
            ),
            "batchGet",
        )
        value_ranges = (result or {}).get("valueRanges", [])
        columns = [vr.get("values", []) for vr in value_ranges]
        columns.extend([] for _ in range(len(ranges) - len(columns)))
        return columns

    # Async API used by the request handlers

    async def verify_access(self) -> list[str]:
        """Confirm the spreadsheet is reachable and return its tab titles."""
        return await run_in_threadpool(self.sheet_titles)

    async def create_sheet(self, title: str) -> None:
        await run_in_threadpool(self.add_sheet, title)

    async def append_rows(self, range_spec: str, rows: Sequence[Sequence[Any]]) -> int:
        return await run_in_threadpool(self.append, range_spec, rows)

    async def read_columns(self, ranges: Sequence[str]) -> list[list[list[Any]]]:
        return await run_in_threadpool(self.batch_get, ranges)
