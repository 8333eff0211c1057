"""Currency catalog service.

Wraps the catalog lookups used across the application and decides which
currency a dashboard is displayed in.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.models.currency import Currency
from app.models.user import User
from app.repositories.currency import CurrencyRepository

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    """Normalize a currency code for comparison and catalog lookup."""
    return code.strip().upper()


async def list_currencies(db: AsyncSession) -> list[Currency]:
    """List all supported currencies ordered by code."""
    return await CurrencyRepository(Currency, db).get_all()


async def currency_exists(db: AsyncSession, code: str) -> bool:
    """Check whether a code is in the catalog (case-insensitive)."""
    return await CurrencyRepository(Currency, db).exists_code(normalize_code(code))


async def get_currency_symbol(db: AsyncSession, code: str) -> str | None:
    """Get the symbol of a currency, or None if the code is unknown."""
    return await CurrencyRepository(Currency, db).get_symbol(normalize_code(code))


async def resolve_display_currency(
    db: AsyncSession,
    user: User,
    requested: str | None = None,
) -> tuple[str, str]:
    """Pick the dashboard display currency and its symbol.

    Precedence: the explicitly requested code, then the user's default
    currency, then ``settings.DEFAULT_DISPLAY_CURRENCY``.

    Args:
        db: Database session
        user: The requesting user
        requested: Currency code from the request, if any

    Returns:
        Tuple of (code, symbol)

    Raises:
        ValidationError: The chosen code is not in the catalog (field ``currency``)

    Example:
        >>> await resolve_display_currency(db, user, "usd")
        ('USD', '$')
    """
    if requested and requested.strip():
        code = normalize_code(requested)
    elif user.default_currency_code:
        code = user.default_currency_code
    else:
        code = normalize_code(settings.DEFAULT_DISPLAY_CURRENCY)

    symbol = await get_currency_symbol(db, code)
    if symbol is None:
        raise ValidationError.for_field("currency", f"Currency '{code}' not found.")

    logger.debug(f"Display currency for user {user.id}: {code}")
    return code, symbol
