"""Exchange rate repository: the user-scoped rate store."""

from datetime import date

from sqlalchemy import exists, select

from app.models.exchange_rate import ExchangeRate
from app.repositories.base import BaseRepository


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    """Repository for ExchangeRate with dated, per-user lookups.

    Currency codes are expected upper-cased; normalization happens in the
    service layer before any query.

    Example:
        >>> repo = ExchangeRateRepository(ExchangeRate, db)
        >>> rate = await repo.find_rate(user.id, "EUR", "USD", date(2025, 1, 2))
    """

    async def find_rate(
        self,
        user_id: int,
        from_code: str,
        to_code: str,
        as_of: date,
    ) -> ExchangeRate | None:
        """Get the rate in effect for a currency pair on a given date.

        Returns the record with the latest ``effective_date`` on or before
        ``as_of`` for exactly this ``(user, from, to)`` pair. Should two records
        share that date, the one with the lowest id wins.

        Args:
            user_id: Owner of the rates
            from_code: Source currency code
            to_code: Target currency code
            as_of: Date the rate must be effective on

        Returns:
            The applicable rate, or None if no record is effective yet

        Example:
            >>> # EUR->USD 1.05 from Jan 1st, 1.20 from Jan 28th
            >>> rate = await repo.find_rate(1, "EUR", "USD", date(2025, 1, 2))
            >>> rate.rate
            Decimal('1.050000')
        """
        result = await self.db.execute(
            select(ExchangeRate)
            .where(
                ExchangeRate.user_id == user_id,
                ExchangeRate.from_currency_code == from_code,
                ExchangeRate.to_currency_code == to_code,
                ExchangeRate.effective_date <= as_of,
            )
            .order_by(ExchangeRate.effective_date.desc(), ExchangeRate.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def exists_duplicate(
        self,
        user_id: int,
        from_code: str,
        to_code: str,
        effective_date: date,
        exclude_id: int | None = None,
    ) -> bool:
        """Check whether a rate already exists for the pair on that date.

        Args:
            user_id: Owner of the rates
            from_code: Source currency code
            to_code: Target currency code
            effective_date: Effective date to check
            exclude_id: Rate to ignore (the one being updated)

        Returns:
            True if another record occupies ``(user, from, to, effective_date)``
        """
        conditions = [
            ExchangeRate.user_id == user_id,
            ExchangeRate.from_currency_code == from_code,
            ExchangeRate.to_currency_code == to_code,
            ExchangeRate.effective_date == effective_date,
        ]
        if exclude_id is not None:
            conditions.append(ExchangeRate.id != exclude_id)

        result = await self.db.execute(select(exists().where(*conditions)))
        return bool(result.scalar())

    async def get_by_user(self, user_id: int) -> list[ExchangeRate]:
        """Get all rates owned by a user.

        Returns:
            Rates ordered by effective date (newest first), then by source
            and target currency code
        """
        result = await self.db.execute(
            select(ExchangeRate)
            .where(ExchangeRate.user_id == user_id)
            .order_by(
                ExchangeRate.effective_date.desc(),
                ExchangeRate.from_currency_code,
                ExchangeRate.to_currency_code,
            )
        )
        return list(result.scalars().all())

    async def get_by_id_and_user(self, rate_id: int, user_id: int) -> ExchangeRate | None:
        """Get a rate by ID, only if it belongs to the given user."""
        result = await self.db.execute(
            select(ExchangeRate).where(
                ExchangeRate.id == rate_id,
                ExchangeRate.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
