"""Unit tests for error handlers, the error catalog and PII filtering."""

import json
import logging
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import OperationalError

from sheetledger.api.middleware.error_handler import (
    handle_database_error,
    handle_generic_error,
    handle_ledger_error,
    handle_validation_error,
)
from sheetledger.api.middleware.logging import JSONLogFormatter, filter_pii
from sheetledger.core.errors import error_body, get_error
from sheetledger.core.exceptions import (
    DatabaseError,
    IncorrectPasswordError,
    SpreadsheetServiceError,
    UpstreamError,
    UserAlreadyExistsError,
    UserNotFoundError,
    ValidationError,
)


@pytest.fixture
def request_mock():
    request = Mock(spec=Request)
    request.url.path = "/login"
    request.method = "POST"
    return request


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_cls,code,http_status,family",
        [
            (UserAlreadyExistsError, "AUTH_001", 400, ValidationError),
            (UserNotFoundError, "AUTH_002", 404, ValidationError),
            (IncorrectPasswordError, "AUTH_003", 401, ValidationError),
            (DatabaseError, "DB_001", 500, UpstreamError),
            (SpreadsheetServiceError, "SHEET_001", 500, UpstreamError),
        ],
    )
    def test_defaults(self, exc_cls, code, http_status, family):
        exc = exc_cls()

        assert isinstance(exc, family)
        assert exc.error_code == code
        assert exc.http_status == http_status
        assert exc.details == {}

    def test_unknown_code_falls_back_to_generic(self):
        assert get_error("NOPE_999")["code"] == "SYS_001"


class TestLedgerErrorHandler:
    @pytest.mark.asyncio
    async def test_client_error_returns_message(self, request_mock):
        response = await handle_ledger_error(request_mock, IncorrectPasswordError())

        assert response.status_code == 401
        content = json.loads(response.body.decode())
        assert content["error"] == "Incorrect password"
        assert content["error_code"] == "AUTH_003"
        assert "suggestion" in content
        assert "retry_allowed" in content

    @pytest.mark.asyncio
    async def test_upstream_error_hides_details(self, request_mock):
        exc = SpreadsheetServiceError(details={"status": 403, "sheet": "secret-tab"})

        response = await handle_ledger_error(request_mock, exc)

        assert response.status_code == 500
        body = response.body.decode()
        assert "secret-tab" not in body
        assert json.loads(body)["error"] == "Internal Server Error"


class TestValidationErrorHandler:
    @pytest.mark.asyncio
    async def test_handle_validation_error(self, request_mock):
        exc = RequestValidationError(
            [{"loc": ("body", "password"), "msg": "Field required", "type": "missing"}]
        )

        response = await handle_validation_error(request_mock, exc)

        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert content["error_code"] == "VAL_001"
        assert "body.password: Field required" in content["error"]


class TestFallbackHandlers:
    @pytest.mark.asyncio
    async def test_database_error(self, request_mock):
        exc = OperationalError("SELECT secret", {"p": "hunter2"}, Exception("down"))

        response = await handle_database_error(request_mock, exc)

        assert response.status_code == 500
        assert "hunter2" not in response.body.decode()
        assert json.loads(response.body.decode())["error_code"] == "DB_001"

    @pytest.mark.asyncio
    async def test_generic_error(self, request_mock):
        response = await handle_generic_error(request_mock, RuntimeError("boom"))

        assert response.status_code == 500
        content = json.loads(response.body.decode())
        assert content == error_body("SYS_001")
        assert "boom" not in response.body.decode()


class TestPIIFiltering:
    def test_filters_email(self):
        assert filter_pii("contact jane@example.com now") == "contact [EMAIL] now"

    def test_filters_card_number(self):
        assert "[CARD]" in filter_pii("card 4111 1111 1111 1111 used")

    def test_filters_password_pairs(self):
        filtered = filter_pii('{"userId": "jane", "password": "hunter2"}')

        assert "hunter2" not in filtered
        assert "[REDACTED]" in filtered

    def test_empty_text(self):
        assert filter_pii("") == ""

    def test_json_formatter_filters_message(self):
        record = logging.LogRecord(
            "test", logging.INFO, __file__, 1, "user jane@example.com", None, None
        )
        record.request_id = "abc"

        data = json.loads(JSONLogFormatter().format(record))

        assert data["message"] == "user [EMAIL]"
        assert data["request_id"] == "abc"
        assert data["level"] == "INFO"
