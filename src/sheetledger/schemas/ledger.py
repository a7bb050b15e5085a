"""Request/response schemas for reading and appending ledger rows."""

from decimal import Decimal

from pydantic import BaseModel, Field

from sheetledger.schemas.auth import CamelModel


class TransactionIn(CamelModel):
    """One ledger row as sent by the client."""

    date: str = Field(..., description="Transaction date, stored as given")
    transaction_detail: str = Field(default="", description="Free-text description")
    category: str = Field(..., description="Reporting category")
    amount: Decimal = Field(..., allow_inf_nan=False, description="Transaction amount")
    debit_credit: str = Field(..., description='"Credit" or "Debit"')

    def to_row(self) -> list:
        """Cells in sheet column order (Date, Detail, Category, Amount, Type)."""
        return [
            self.date,
            self.transaction_detail,
            self.category,
            float(self.amount),
            self.debit_credit,
        ]


class CategoryTotalResponse(BaseModel):
    """Net amount for one category."""

    category: str
    amount: float = Field(..., ge=0, description="|credits - debits| for the category")


class MessageResponse(BaseModel):
    message: str
