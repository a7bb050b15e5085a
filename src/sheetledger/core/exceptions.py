"""Exception hierarchy for request handling.

Client errors (``ValidationError`` family) surface as 4xx with a message.
Upstream failures (``UpstreamError`` family) surface as a generic 500; their
details are kept for logs only. Each exception maps to an entry in errors.py.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all handled request errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "AUTH_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return
    """

    default_code = "SYS_001"
    default_status = 500

    def __init__(
        self,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code or self.default_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(self.error_code)


class ValidationError(LedgerError):
    """Raised when a request is well-formed but cannot be honoured."""

    default_code = "VAL_001"
    default_status = 400


class UserAlreadyExistsError(ValidationError):
    """Raised on registration when the username is taken."""

    default_code = "AUTH_001"
    default_status = 400


class UserNotFoundError(ValidationError):
    """Raised on login when no user has the given username."""

    default_code = "AUTH_002"
    default_status = 404


class IncorrectPasswordError(ValidationError):
    """Raised on login when the password does not verify."""

    default_code = "AUTH_003"
    default_status = 401


class UpstreamError(LedgerError):
    """Raised when an external service (database, spreadsheet) fails.

    Every upstream failure is terminal for the request; nothing is retried.
    """

    default_code = "SYS_001"
    default_status = 500


class DatabaseError(UpstreamError):
    """Raised when the credential store cannot complete an operation."""

    default_code = "DB_001"


class SpreadsheetServiceError(UpstreamError):
    """Raised when a Google Sheets API call fails or times out."""

    default_code = "SHEET_001"
