"""Account endpoints: registration and login."""

from fastapi import APIRouter, Depends

from sheetledger.api.deps import get_auth_service
from sheetledger.schemas.auth import LoginRequest, NewUserRequest, UserResponse
from sheetledger.services.auth import AuthService

router = APIRouter(tags=["users"])


@router.post(
    "/newUser",
    response_model=UserResponse,
    summary="Register new user",
    description="Create a user account and its ledger tab in the spreadsheet.",
)
async def new_user(
    data: NewUserRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Register a new user account.

    Raises:
        400: Username already exists or invalid body
        500: Database or spreadsheet failure
    """
    user = await auth_service.register(
        name=data.name,
        password=data.password,
        sheet_name=data.sheet_name,
        sheet_created=data.sheet_created,
    )
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=UserResponse,
    summary="User login",
    description="Check a username and password and return the user's record.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Authenticate a user.

    Raises:
        404: Unknown username
        401: Incorrect password
        500: Database failure
    """
    user = await auth_service.login(username=data.user_id, password=data.password)
    return UserResponse.model_validate(user)
