"""Currency repository for catalog lookups."""

from sqlalchemy import select

from app.models.currency import Currency
from app.repositories.base import BaseRepository


class CurrencyRepository(BaseRepository[Currency]):
    """Repository for the Currency catalog.

    Codes are matched exactly; callers pass them upper-cased.

    Example:
        >>> repo = CurrencyRepository(Currency, db)
        >>> await repo.exists_code("USD")
        True
    """

    async def get_all(self) -> list[Currency]:
        """Get every supported currency ordered by code."""
        result = await self.db.execute(select(Currency).order_by(Currency.code))
        return list(result.scalars().all())

    async def exists_code(self, code: str) -> bool:
        """Check whether a currency code is in the catalog."""
        return await self.exists(code)

    async def get_symbol(self, code: str) -> str | None:
        """Get the symbol for a currency code, or None if unknown."""
        result = await self.db.execute(
            select(Currency.symbol).where(Currency.code == code)
        )
        return result.scalar_one_or_none()

    async def get_codes(self) -> set[str]:
        """Get the set of all catalog codes."""
        result = await self.db.execute(select(Currency.code))
        return set(result.scalars().all())
