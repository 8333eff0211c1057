"""Repository layer for database operations.

Repositories:
    - BaseRepository: Generic CRUD operations for any model
    - UserRepository: User lookups and settings
    - CurrencyRepository: Currency catalog lookups
    - ExchangeRateRepository: User-scoped, dated exchange rates
    - CategoryRepository: Default and user-owned categories
    - ExpenseRepository: Month-scoped expense queries

Usage:
    >>> from app.repositories import ExchangeRateRepository
    >>> from app.models.exchange_rate import ExchangeRate
    >>>
    >>> repo = ExchangeRateRepository(ExchangeRate, db)
    >>> rate = await repo.find_rate(user.id, "EUR", "USD", date(2025, 1, 2))
"""

from app.repositories.base import BaseRepository
from app.repositories.category import CategoryRepository
from app.repositories.currency import CurrencyRepository
from app.repositories.exchange_rate import ExchangeRateRepository
from app.repositories.expense import ExpenseRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CurrencyRepository",
    "ExchangeRateRepository",
    "CategoryRepository",
    "ExpenseRepository",
]
