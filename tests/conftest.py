import os
import re
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(__file__).parent / 'sheetledger_test.db'}",
)

# Settings are read at import time; point them at test resources first.
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("SHEET_ID", "test-spreadsheet")

from sheetledger.api.deps import get_sheets_client  # noqa: E402
from sheetledger.core.exceptions import SpreadsheetServiceError  # noqa: E402
from sheetledger.db.session import get_db  # noqa: E402
from sheetledger.main import app  # noqa: E402

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

_RANGE = re.compile(r"^'(?P<title>(?:[^']|'')*)'!(?P<col>[A-Z])(?P<start>\d*):[A-Z]$")


class FakeSheetsClient:
    """In-memory stand-in for SheetsClient.

    Tabs are lists of rows. Reads mimic the Sheets API: one single-cell list
    per row, trailing blank cells trimmed.
    """

    def __init__(self):
        self.tabs: dict[str, list[list]] = {}
        self.fail = False
        self.calls: list[tuple] = []

    def _check(self, action: str) -> None:
        self.calls.append((action,))
        if self.fail:
            raise SpreadsheetServiceError(details={"action": action})

    @staticmethod
    def _parse(range_spec: str) -> tuple[str, int, int]:
        match = _RANGE.match(range_spec)
        assert match, f"unexpected range {range_spec!r}"
        title = match.group("title").replace("''", "'")
        col = ord(match.group("col")) - ord("A")
        start = int(match.group("start") or 1) - 1
        return title, col, start

    async def verify_access(self) -> list[str]:
        self._check("get")
        return list(self.tabs)

    async def create_sheet(self, title: str) -> None:
        self._check("batchUpdate")
        if title in self.tabs:
            raise SpreadsheetServiceError(details={"action": "batchUpdate"})
        self.tabs[title] = []

    async def append_rows(self, range_spec: str, rows) -> int:
        self._check("append")
        title, _, _ = self._parse(range_spec)
        if title not in self.tabs:
            raise SpreadsheetServiceError(details={"action": "append"})
        self.tabs[title].extend(list(row) for row in rows)
        return len(rows)

    async def read_columns(self, ranges) -> list[list[list]]:
        self._check("batchGet")
        columns = []
        for range_spec in ranges:
            title, col, start = self._parse(range_spec)
            if title not in self.tabs:
                raise SpreadsheetServiceError(details={"action": "batchGet"})
            cells = [
                [row[col]] if col < len(row) and row[col] not in (None, "") else []
                for row in self.tabs[title][start:]
            ]
            while cells and not cells[-1]:
                cells.pop()
            columns.append(cells)
        return columns


@pytest.fixture
def sheets() -> FakeSheetsClient:
    return FakeSheetsClient()


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests run without a database.
    """
    from sheetledger.models.base import BaseModel

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession, sheets: FakeSheetsClient):
    """Create a registered user whose ledger tab already exists."""
    from sheetledger.core.security import hash_password
    from sheetledger.models.user import User
    from sheetledger.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        username="testuser",
        password_hash=hash_password("password123"),
        sheet_name="testuser",
        sheet_created=True,
    )
    await repo.add(user)
    await repo.commit()
    sheets.tabs["testuser"] = [["Date", "Detail", "Category", "Amount", "Type"]]
    return user


@pytest.fixture
async def client(db_session: AsyncSession, sheets: FakeSheetsClient):
    """Provide test client with database and spreadsheet overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sheets_client] = lambda: sheets

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
