"""Registration and login business logic."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from sheetledger.core.exceptions import (
    DatabaseError,
    IncorrectPasswordError,
    SpreadsheetServiceError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from sheetledger.core.security import hash_password, verify_password
from sheetledger.models.user import User
from sheetledger.repositories.user import UserRepository
from sheetledger.sheets import HEADER_ROW, LEDGER_COLUMNS, SheetsClient, a1_range

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account creation and credential checks."""

    def __init__(self, user_repo: UserRepository, sheets: SheetsClient):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            sheets: Spreadsheet client used to create the user's ledger tab
        """
        self.user_repo = user_repo
        self.sheets = sheets

    async def register(
        self, name: str, password: str, sheet_name: str, sheet_created: bool = False
    ) -> User:
        """
        Register a new user and create their ledger tab.

        The user row is only committed once the tab and its header row exist,
        so a spreadsheet failure leaves no half-registered account behind.

        Args:
            name: Unique username
            password: Plain text password
            sheet_name: Title for the user's tab
            sheet_created: Client-provided flag, stored as given

        Returns:
            Created user object

        Raises:
            UserAlreadyExistsError: If the username is taken
            DatabaseError: If the credential store fails
            SpreadsheetServiceError: If the tab cannot be created
        """
        logger.info("Attempting to create a new user")

        try:
            exists = await self.user_repo.username_exists(name)
        except SQLAlchemyError as ex:
            raise DatabaseError(details={"operation": "username_exists"}) from ex

        if exists:
            logger.warning("Registration rejected: username already exists")
            raise UserAlreadyExistsError()

        user = User(
            username=name,
            password_hash=hash_password(password),
            sheet_name=sheet_name,
            sheet_created=sheet_created,
        )

        try:
            await self.user_repo.add(user)
        except IntegrityError as ex:
            # Lost a race with a concurrent registration for the same name.
            await self.user_repo.rollback()
            raise UserAlreadyExistsError() from ex
        except SQLAlchemyError as ex:
            await self.user_repo.rollback()
            raise DatabaseError(details={"operation": "add_user"}) from ex

        try:
            await self.sheets.create_sheet(sheet_name)
            await self.sheets.append_rows(a1_range(sheet_name, LEDGER_COLUMNS), [HEADER_ROW])
        except SpreadsheetServiceError:
            await self.user_repo.rollback()
            raise

        try:
            await self.user_repo.commit()
        except SQLAlchemyError as ex:
            await self.user_repo.rollback()
            raise DatabaseError(details={"operation": "commit_user"}) from ex

        logger.info("Created new user and ledger sheet", extra={"sheet": sheet_name})
        return user

    async def login(self, username: str, password: str) -> User:
        """
        Check a username/password pair.

        Raises:
            UserNotFoundError: If no user has this username
            IncorrectPasswordError: If the password does not match
            DatabaseError: If the credential store fails
        """
        logger.info("Attempting login")

        try:
            user = await self.user_repo.get_by_username(username)
        except SQLAlchemyError as ex:
            raise DatabaseError(details={"operation": "get_by_username"}) from ex

        if user is None:
            logger.warning("Login failed: user not found")
            raise UserNotFoundError()

        if not verify_password(password, user.password_hash):
            logger.warning("Login failed: incorrect password")
            raise IncorrectPasswordError()

        logger.info("Login successful")
        return user
