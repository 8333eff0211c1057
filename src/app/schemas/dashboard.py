"""Dashboard schemas: the monthly spending snapshot."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel


class DashboardExpense(BaseModel):
    """An expense as presented on the dashboard, in the display currency."""

    id: int
    amount: Decimal
    currency_code: str
    currency_symbol: str
    description: str
    date: dt.date
    category_id: int
    category_name: str
    category_color: str | None = None
    created_at: dt.datetime


class CategorySpending(BaseModel):
    """Total spending of one category within the period."""

    category_name: str
    color: str | None = None
    total: Decimal
    percentage: float


class DailySpending(BaseModel):
    """Total spending on one calendar day."""

    date: dt.date
    total: Decimal


class DashboardResponse(BaseModel):
    """Aggregated spending for one month, converted to a single currency.

    Computed fresh for every request and never persisted.
    """

    display_currency: str
    display_symbol: str
    total_spent: Decimal
    transaction_count: int
    highest_expense: DashboardExpense | None = None
    top_category: str | None = None
    category_breakdown: list[CategorySpending] = []
    daily_spending: list[DailySpending] = []
