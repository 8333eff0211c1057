"""Schemas package."""

from app.schemas.auth import Token, TokenData, UserRegister
from app.schemas.category import CategoryCreate, CategoryResponse
from app.schemas.currency import CurrencyResponse
from app.schemas.dashboard import (
    CategorySpending,
    DailySpending,
    DashboardExpense,
    DashboardResponse,
)
from app.schemas.exchange_rate import (
    ExchangeRateCreate,
    ExchangeRateResponse,
    ExchangeRateUpdate,
)
from app.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from app.schemas.settings import UserSettings
from app.schemas.user import UserResponse

__all__ = [
    # Authentication schemas
    "Token",
    "TokenData",
    "UserRegister",
    # User schemas
    "UserResponse",
    "UserSettings",
    # Currency schemas
    "CurrencyResponse",
    "ExchangeRateCreate",
    "ExchangeRateResponse",
    "ExchangeRateUpdate",
    # Expense schemas
    "CategoryCreate",
    "CategoryResponse",
    "ExpenseCreate",
    "ExpenseResponse",
    "ExpenseUpdate",
    # Dashboard schemas
    "CategorySpending",
    "DailySpending",
    "DashboardExpense",
    "DashboardResponse",
]
