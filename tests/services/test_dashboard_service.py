"""Tests for monthly dashboard aggregation."""

import asyncio
from datetime import UTC, date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.models.exchange_rate import ExchangeRate
from app.models.expense import Expense
from app.models.user import User
from app.services.dashboard_service import (
    ConvertedExpense,
    build_dashboard,
    convert_expenses,
    summarize,
)


async def add_expense(
    db: AsyncSession,
    user: User,
    category: Category,
    amount: str,
    currency: str,
    day: date,
    description: str = "Expense",
) -> Expense:
    expense = Expense(
        user_id=user.id,
        category_id=category.id,
        currency_code=currency,
        amount=Decimal(amount),
        description=description,
        date=day,
    )
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense


async def add_rate(
    db: AsyncSession, user: User, from_code: str, to_code: str, rate: str, day: date
) -> ExchangeRate:
    exchange_rate = ExchangeRate(
        user_id=user.id,
        from_currency_code=from_code,
        to_currency_code=to_code,
        rate=Decimal(rate),
        effective_date=day,
    )
    db.add(exchange_rate)
    await db.commit()
    return exchange_rate


def converted(expense_id: int, amount: str, day: date, category: str = "Food", color: str = "#FF0000"):
    expense = SimpleNamespace(
        id=expense_id,
        description=f"Expense {expense_id}",
        date=day,
        category_id=1,
        category=SimpleNamespace(name=category, color=color),
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )
    return ConvertedExpense(expense, Decimal(amount))


@pytest.mark.unit
def test_summarize_empty() -> None:
    """Test an empty month yields zeros and no highlights."""
    dashboard = summarize([], "EUR", "€")

    assert dashboard.total_spent == Decimal("0")
    assert dashboard.transaction_count == 0
    assert dashboard.highest_expense is None
    assert dashboard.top_category is None
    assert dashboard.category_breakdown == []
    assert dashboard.daily_spending == []


@pytest.mark.unit
def test_summarize_highest_expense_tie_goes_to_lowest_id() -> None:
    """Test equal converted amounts pick the expense with the lowest id."""
    items = [
        converted(7, "50.00", date(2025, 1, 3)),
        converted(3, "50.00", date(2025, 1, 4)),
        converted(5, "10.00", date(2025, 1, 5)),
    ]

    dashboard = summarize(items, "EUR", "€")

    assert dashboard.highest_expense is not None
    assert dashboard.highest_expense.id == 3
    assert dashboard.highest_expense.amount == Decimal("50.00")
    assert dashboard.highest_expense.currency_code == "EUR"
    assert dashboard.highest_expense.currency_symbol == "€"


@pytest.mark.unit
def test_summarize_category_breakdown() -> None:
    """Test categories are grouped, sorted by total and sum to 100 percent."""
    items = [
        converted(1, "10.00", date(2025, 1, 1), "Food", "#FF0000"),
        converted(2, "20.00", date(2025, 1, 1), "Travel", "#0000FF"),
        converted(3, "3.33", date(2025, 1, 2), "Food", "#FF0000"),
        converted(4, "0.01", date(2025, 1, 2), "Books", "#00FF00"),
    ]

    dashboard = summarize(items, "EUR", "€")

    assert [c.category_name for c in dashboard.category_breakdown] == ["Travel", "Food", "Books"]
    assert [c.total for c in dashboard.category_breakdown] == [
        Decimal("20.00"),
        Decimal("13.33"),
        Decimal("0.01"),
    ]
    assert dashboard.top_category == "Travel"
    total_percentage = sum(c.percentage for c in dashboard.category_breakdown)
    assert abs(total_percentage - 100.0) <= 0.05


@pytest.mark.unit
def test_summarize_equal_totals_sorted_by_name() -> None:
    """Test categories with equal totals are ordered by name."""
    items = [
        converted(1, "10.00", date(2025, 1, 1), "Zoo", "#000001"),
        converted(2, "10.00", date(2025, 1, 1), "Art", "#000002"),
    ]

    dashboard = summarize(items, "EUR", "€")

    assert [c.category_name for c in dashboard.category_breakdown] == ["Art", "Zoo"]
    assert [c.percentage for c in dashboard.category_breakdown] == [50.0, 50.0]


@pytest.mark.unit
def test_summarize_same_name_different_color_are_separate() -> None:
    """Test categories are keyed by name and color together."""
    items = [
        converted(1, "10.00", date(2025, 1, 1), "Food", "#FF0000"),
        converted(2, "5.00", date(2025, 1, 1), "Food", "#00FF00"),
    ]

    dashboard = summarize(items, "EUR", "€")

    assert len(dashboard.category_breakdown) == 2


@pytest.mark.unit
def test_summarize_daily_spending_sorted() -> None:
    """Test daily totals are summed per day in ascending order."""
    items = [
        converted(1, "5.00", date(2025, 1, 20)),
        converted(2, "1.25", date(2025, 1, 3)),
        converted(3, "2.75", date(2025, 1, 3)),
    ]

    dashboard = summarize(items, "EUR", "€")

    assert [(d.date, d.total) for d in dashboard.daily_spending] == [
        (date(2025, 1, 3), Decimal("4.00")),
        (date(2025, 1, 20), Decimal("5.00")),
    ]


@pytest.mark.unit
def test_summarize_is_order_independent() -> None:
    """Test the snapshot doesn't depend on input order."""
    items = [
        converted(1, "5.00", date(2025, 1, 20), "Food"),
        converted(2, "7.00", date(2025, 1, 3), "Travel"),
        converted(3, "7.00", date(2025, 1, 3), "Food"),
    ]

    assert summarize(items, "EUR", "€") == summarize(list(reversed(items)), "EUR", "€")


@pytest.mark.integration
async def test_build_dashboard_uses_rate_of_expense_date(
    test_db: AsyncSession, test_user: User, food_category: Category
) -> None:
    """Test each expense converts with the rate effective on its own date."""
    await add_rate(test_db, test_user, "EUR", "USD", "1.05", date(2025, 1, 1))
    await add_rate(test_db, test_user, "EUR", "USD", "1.20", date(2025, 1, 28))
    await add_expense(test_db, test_user, food_category, "100.00", "EUR", date(2025, 1, 2))
    await add_expense(test_db, test_user, food_category, "100.00", "EUR", date(2025, 1, 29))

    dashboard = await build_dashboard(test_db, test_user.id, 1, 2025, "USD", "$")

    assert dashboard.total_spent == Decimal("225.00")
    assert dashboard.transaction_count == 2
    assert dashboard.highest_expense is not None
    assert dashboard.highest_expense.amount == Decimal("120.00")
    assert [d.total for d in dashboard.daily_spending] == [Decimal("105.00"), Decimal("120.00")]


@pytest.mark.integration
async def test_build_dashboard_inverts_reverse_rate(
    test_db: AsyncSession, test_user: User, food_category: Category
) -> None:
    """Test a USD expense shown in EUR uses the inverted EUR->USD rate."""
    await add_rate(test_db, test_user, "EUR", "USD", "1.05", date(2025, 1, 1))
    await add_expense(test_db, test_user, food_category, "105.00", "USD", date(2025, 1, 10))

    dashboard = await build_dashboard(test_db, test_user.id, 1, 2025, "EUR", "€")

    assert dashboard.total_spent == Decimal("100.00")


@pytest.mark.integration
@pytest.mark.parametrize(("currency", "symbol"), [("USD", "$"), ("EUR", "€"), ("GBP", "£")])
async def test_build_dashboard_without_rates_converts_one_to_one(
    test_db: AsyncSession,
    test_user: User,
    food_category: Category,
    currency: str,
    symbol: str,
) -> None:
    """Test an expense without any applicable rate keeps its amount."""
    await add_expense(test_db, test_user, food_category, "50.00", "USD", date(2025, 1, 15))

    dashboard = await build_dashboard(test_db, test_user.id, 1, 2025, currency, symbol)

    assert dashboard.total_spent == Decimal("50.00")
    assert dashboard.display_currency == currency
    assert dashboard.display_symbol == symbol


@pytest.mark.integration
async def test_build_dashboard_empty_month(test_db: AsyncSession, test_user: User) -> None:
    """Test a month without expenses returns an empty snapshot."""
    dashboard = await build_dashboard(test_db, test_user.id, 2, 2025, "EUR", "€")

    assert dashboard.transaction_count == 0
    assert dashboard.total_spent == Decimal("0")
    assert dashboard.top_category is None


@pytest.mark.integration
async def test_build_dashboard_only_includes_month_and_owner(
    test_db: AsyncSession,
    test_user: User,
    other_user: User,
    food_category: Category,
    travel_category: Category,
) -> None:
    """Test expenses of other months and other users are excluded."""
    await add_expense(test_db, test_user, food_category, "10.00", "EUR", date(2024, 12, 31))
    await add_expense(test_db, test_user, food_category, "20.00", "EUR", date(2025, 1, 1))
    await add_expense(test_db, test_user, travel_category, "30.00", "EUR", date(2025, 1, 31))
    await add_expense(test_db, test_user, food_category, "40.00", "EUR", date(2025, 2, 1))
    await add_expense(test_db, other_user, food_category, "99.00", "EUR", date(2025, 1, 15))

    dashboard = await build_dashboard(test_db, test_user.id, 1, 2025, "EUR", "€")

    assert dashboard.total_spent == Decimal("50.00")
    assert dashboard.transaction_count == 2
    assert dashboard.top_category == "Trips"
    assert [c.percentage for c in dashboard.category_breakdown] == [60.0, 40.0]


@pytest.mark.integration
async def test_build_dashboard_ignores_other_users_rates(
    test_db: AsyncSession, test_user: User, other_user: User, food_category: Category
) -> None:
    """Test another user's rates are never used."""
    await add_rate(test_db, other_user, "EUR", "USD", "2.00", date(2025, 1, 1))
    await add_expense(test_db, test_user, food_category, "10.00", "EUR", date(2025, 1, 5))

    dashboard = await build_dashboard(test_db, test_user.id, 1, 2025, "USD", "$")

    assert dashboard.total_spent == Decimal("10.00")


@pytest.mark.integration
async def test_build_dashboard_is_read_only(
    test_db: AsyncSession, test_user: User, food_category: Category
) -> None:
    """Test building a dashboard leaves nothing pending in the session."""
    await add_expense(test_db, test_user, food_category, "10.00", "EUR", date(2025, 1, 5))

    await build_dashboard(test_db, test_user.id, 1, 2025, "USD", "$")

    assert not test_db.new
    assert not test_db.dirty
    assert not test_db.deleted


class CancellingRateStore:
    """Rate store whose lookups are cancelled; counts every lookup."""

    def __init__(self, started: asyncio.Event | None = None) -> None:
        self.calls = 0
        self.started = started

    async def find_rate(self, user_id: int, from_code: str, to_code: str, as_of: date):
        self.calls += 1
        if self.started is None:
            raise asyncio.CancelledError
        self.started.set()
        await asyncio.Event().wait()


def pending_expenses() -> list[SimpleNamespace]:
    return [
        SimpleNamespace(amount=Decimal("10.00"), currency_code="EUR", date=date(2025, 1, day))
        for day in (2, 3, 4)
    ]


@pytest.mark.unit
async def test_convert_expenses_propagates_cancellation() -> None:
    """Test a cancelled lookup stops the pass without further lookups."""
    store = CancellingRateStore()

    with pytest.raises(asyncio.CancelledError):
        await convert_expenses(pending_expenses(), store, user_id=1, display_currency="USD")

    assert store.calls == 1


@pytest.mark.unit
async def test_convert_expenses_task_cancelled_mid_pass() -> None:
    """Test cancelling the task while a lookup is pending ends the pass."""
    started = asyncio.Event()
    store = CancellingRateStore(started)
    task = asyncio.create_task(
        convert_expenses(pending_expenses(), store, user_id=1, display_currency="USD")
    )

    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert task.cancelled()
    assert store.calls == 1
