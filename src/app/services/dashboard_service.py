"""Monthly dashboard aggregation with multi-currency conversion.

Every expense is converted into the display currency using the rate in effect
on the expense's own date, not today's rate. Conversions are folded into
totals, a category breakdown and a daily series only after all of them are
done, so the result doesn't depend on resolution order.

The whole pass is read-only. If the request is cancelled, the pending
``await`` raises ``asyncio.CancelledError`` and no further conversions run.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import MoneyConstants
from app.models.exchange_rate import ExchangeRate
from app.models.expense import Expense
from app.repositories.exchange_rate import ExchangeRateRepository
from app.repositories.expense import ExpenseRepository
from app.schemas.dashboard import (
    CategorySpending,
    DailySpending,
    DashboardExpense,
    DashboardResponse,
)
from app.services.exchange_rate_service import MemoizedRateResolver, RateStore
from app.services.money import percentage_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertedExpense:
    """An expense paired with its amount in the display currency."""

    expense: Expense
    amount: Decimal


async def convert_expenses(
    expenses: list[Expense],
    store: RateStore,
    user_id: int,
    display_currency: str,
) -> list[ConvertedExpense]:
    """Convert each expense as of its own date.

    Returns:
        Converted expenses in the same order as the input
    """
    resolver = MemoizedRateResolver(store, user_id)
    converted: list[ConvertedExpense] = []
    for expense in expenses:
        amount = await resolver.convert(
            expense.amount, expense.currency_code, display_currency, expense.date
        )
        converted.append(ConvertedExpense(expense, amount))
    return converted


def summarize(
    converted: list[ConvertedExpense],
    display_currency: str,
    display_symbol: str,
) -> DashboardResponse:
    """Fold converted expenses into a dashboard snapshot.

    Pure function of its input; ordering of ``converted`` doesn't matter.
    """
    if not converted:
        return DashboardResponse(
            display_currency=display_currency,
            display_symbol=display_symbol,
            total_spent=MoneyConstants.ZERO,
            transaction_count=0,
        )

    total_spent = sum((item.amount for item in converted), MoneyConstants.ZERO)

    # Highest converted amount; ties go to the lowest id
    highest = min(converted, key=lambda item: (-item.amount, item.expense.id))

    by_category: dict[tuple[str, str | None], Decimal] = defaultdict(lambda: MoneyConstants.ZERO)
    for item in converted:
        key = (item.expense.category.name, item.expense.category.color)
        by_category[key] += item.amount

    # Largest total first; name then color keep equal totals in a stable order
    groups = sorted(by_category.items(), key=lambda kv: (-kv[1], kv[0][0], kv[0][1] or ""))
    breakdown = [
        CategorySpending(
            category_name=name,
            color=color,
            total=total,
            percentage=float(percentage_of(total, total_spent)),
        )
        for (name, color), total in groups
    ]

    by_day: dict[date, Decimal] = defaultdict(lambda: MoneyConstants.ZERO)
    for item in converted:
        by_day[item.expense.date] += item.amount
    daily = [DailySpending(date=day, total=by_day[day]) for day in sorted(by_day)]

    return DashboardResponse(
        display_currency=display_currency,
        display_symbol=display_symbol,
        total_spent=total_spent,
        transaction_count=len(converted),
        highest_expense=_present(highest, display_currency, display_symbol),
        top_category=breakdown[0].category_name,
        category_breakdown=breakdown,
        daily_spending=daily,
    )


def _present(item: ConvertedExpense, currency: str, symbol: str) -> DashboardExpense:
    expense = item.expense
    return DashboardExpense(
        id=expense.id,
        amount=item.amount,
        currency_code=currency,
        currency_symbol=symbol,
        description=expense.description,
        date=expense.date,
        category_id=expense.category_id,
        category_name=expense.category.name,
        category_color=expense.category.color,
        created_at=expense.created_at,
    )


async def build_dashboard(
    db: AsyncSession,
    user_id: int,
    month: int,
    year: int,
    display_currency: str,
    display_symbol: str,
) -> DashboardResponse:
    """Build the spending snapshot of one month in a single display currency.

    The display currency is expected to be validated by the caller.

    Args:
        db: Database session
        user_id: Owner of the expenses and rates
        month: Calendar month (1-12)
        year: Calendar year
        display_currency: Currency every amount is converted into
        display_symbol: Symbol of the display currency

    Returns:
        DashboardResponse with totals, breakdown and daily series

    Example:
        >>> # EUR->USD 1.05 from Jan 1st and 1.20 from Jan 28th;
        >>> # 100 EUR spent on Jan 2nd and 100 EUR on Jan 29th
        >>> dash = await build_dashboard(db, user.id, 1, 2025, "USD", "$")
        >>> dash.total_spent
        Decimal('225.00')
    """
    expenses = await ExpenseRepository(Expense, db).get_for_month(user_id, month, year)
    store = ExchangeRateRepository(ExchangeRate, db)

    converted = await convert_expenses(expenses, store, user_id, display_currency)
    dashboard = summarize(converted, display_currency, display_symbol)

    logger.info(
        f"Built dashboard for user {user_id} ({year}-{month:02d}, {display_currency}): "
        f"{dashboard.transaction_count} expenses, total {dashboard.total_spent}"
    )
    return dashboard
