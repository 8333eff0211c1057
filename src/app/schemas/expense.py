"""Expense schemas for request/response validation."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from app.core.constants import CurrencyConstants


class ExpenseCreate(BaseModel):
    """Schema for creating an expense."""

    amount: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=500)
    date: dt.date
    category_id: int
    currency_code: str | None = Field(None, max_length=CurrencyConstants.CODE_LENGTH)

    @field_validator("currency_code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        return value.strip().upper() if value else None


class ExpenseResponse(BaseModel):
    """Schema for expense response."""

    id: int
    amount: Decimal
    description: str
    date: dt.date
    currency_code: str
    category_id: int
    category_name: str
    category_color: str | None = None
    created_at: dt.datetime


class ExpenseUpdate(ExpenseCreate):
    """Schema for updating an expense.

    Every field is replaced; an omitted currency falls back to the default
    expense currency, as on creation.
    """
