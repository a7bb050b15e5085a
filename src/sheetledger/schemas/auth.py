"""Pydantic schemas for registration and login endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewUserRequest(CamelModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=255, description="Unique username")
    password: str = Field(..., min_length=1, description="Plain text password")
    sheet_name: str = Field(
        ..., min_length=1, max_length=100, description="Title of the user's ledger tab"
    )
    sheet_created: bool = Field(default=False, description="Client-side sheet flag, stored as given")


class LoginRequest(CamelModel):
    """Request model for user login."""

    user_id: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., description="User password")


class UserResponse(CamelModel):
    """Response model for user data (without the password hash)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: UUID
    username: str
    sheet_name: str
    sheet_created: bool
    created_at: datetime
