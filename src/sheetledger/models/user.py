"""User account holding login credentials and the name of the user's sheet."""
from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from sheetledger.models.base import BaseModel


class User(BaseModel):
    """A registered user. Created once at registration, never updated."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    sheet_name: Mapped[str] = mapped_column(String(100), nullable=False)
    sheet_created: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username}, sheet_name={self.sheet_name})>"
