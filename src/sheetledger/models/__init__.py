"""Database models."""
from sheetledger.models.base import Base, BaseModel
from sheetledger.models.user import User

__all__ = ["Base", "BaseModel", "User"]
