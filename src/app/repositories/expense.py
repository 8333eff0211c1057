"""Expense repository: the expense source for dashboard aggregation."""

from datetime import date

from sqlalchemy import exists, select, update
from sqlalchemy.orm import joinedload

from app.models.expense import Expense
from app.repositories.base import BaseRepository


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """Return the half-open ``[start, end)`` date range of a calendar month."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


class ExpenseRepository(BaseRepository[Expense]):
    """Repository for Expense with month-scoped queries.

    Example:
        >>> repo = ExpenseRepository(Expense, db)
        >>> january = await repo.get_for_month(user.id, month=1, year=2025)
    """

    async def get_for_month(self, user_id: int, month: int, year: int) -> list[Expense]:
        """Get a user's expenses dated within a calendar month.

        The category relationship is eagerly loaded so callers can read the
        category name and color without further queries.

        Returns:
            Expenses ordered by date, then id
        """
        start, end = month_bounds(month, year)
        result = await self.db.execute(
            select(Expense)
            .options(joinedload(Expense.category))
            .where(
                Expense.user_id == user_id,
                Expense.date >= start,
                Expense.date < end,
            )
            .order_by(Expense.date, Expense.id)
        )
        return list(result.scalars().all())

    async def get_by_id_and_user(self, expense_id: int, user_id: int) -> Expense | None:
        """Get an expense by ID, only if it belongs to the given user."""
        result = await self.db.execute(
            select(Expense)
            .options(joinedload(Expense.category))
            .where(Expense.id == expense_id, Expense.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def exists_for_category(self, category_id: int) -> bool:
        """Check whether any expense uses the category."""
        result = await self.db.execute(select(exists().where(Expense.category_id == category_id)))
        return bool(result.scalar())

    async def reassign_category(self, from_category_id: int, to_category_id: int) -> int:
        """Move every expense of one category to another.

        Returns:
            Number of expenses moved
        """
        result = await self.db.execute(
            update(Expense)
            .where(Expense.category_id == from_category_id)
            .values(category_id=to_category_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
