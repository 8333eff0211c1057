"""Idempotent seeding of reference data.

Only rows that are missing are inserted; existing currencies and default
categories are left untouched, so seeding can run on every startup.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.data.reference_data import DEFAULT_CATEGORIES, SUPPORTED_CURRENCIES
from app.db.session import transactional
from app.models.category import Category
from app.models.currency import Currency
from app.repositories.category import CategoryRepository
from app.repositories.currency import CurrencyRepository

logger = logging.getLogger(__name__)


async def seed_currencies(db: AsyncSession) -> int:
    """Insert supported currencies that are not in the catalog yet.

    Returns:
        Number of currencies inserted
    """
    existing = await CurrencyRepository(Currency, db).get_codes()
    to_add = [
        Currency(code=code, name=name, symbol=symbol)
        for code, name, symbol in SUPPORTED_CURRENCIES
        if code not in existing
    ]
    if not to_add:
        return 0

    async with transactional(db):
        db.add_all(to_add)

    logger.info(f"Seeded {len(to_add)} currencies")
    return len(to_add)


async def seed_default_categories(db: AsyncSession) -> int:
    """Insert shared default categories that are missing.

    Returns:
        Number of categories inserted
    """
    existing = await CategoryRepository(Category, db).get_default_names()
    to_add = [
        Category(name=name, color=color, user_id=None)
        for name, color in DEFAULT_CATEGORIES
        if name not in existing
    ]
    if not to_add:
        return 0

    async with transactional(db):
        db.add_all(to_add)

    logger.info(f"Seeded {len(to_add)} default categories")
    return len(to_add)


async def seed_reference_data(db: AsyncSession) -> int:
    """Seed every kind of reference data, returning the number of rows inserted."""
    return await seed_currencies(db) + await seed_default_categories(db)
