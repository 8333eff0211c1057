"""Expense and category operations.

Plain bookkeeping around the expense source the dashboard reads from.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import transactional
from app.models.category import Category
from app.models.expense import Expense
from app.repositories.category import CategoryRepository
from app.repositories.expense import ExpenseRepository
from app.schemas.expense import ExpenseCreate, ExpenseResponse, ExpenseUpdate
from app.services.currency_service import currency_exists

logger = logging.getLogger(__name__)


def to_response(expense: Expense) -> ExpenseResponse:
    """Flatten an expense and its category into the response schema."""
    return ExpenseResponse(
        id=expense.id,
        amount=expense.amount,
        description=expense.description,
        date=expense.date,
        currency_code=expense.currency_code,
        category_id=expense.category_id,
        category_name=expense.category.name,
        category_color=expense.category.color,
        created_at=expense.created_at,
    )


async def list_expenses(db: AsyncSession, user_id: int, month: int, year: int) -> list[Expense]:
    """List the user's expenses of one month."""
    return await ExpenseRepository(Expense, db).get_for_month(user_id, month, year)


async def _validated_fields(
    db: AsyncSession, user_id: int, expense_in: ExpenseCreate
) -> dict[str, object]:
    """Check the currency and category of an expense payload.

    The currency defaults to ``settings.DEFAULT_EXPENSE_CURRENCY``.

    Raises:
        ValidationError: Unknown currency (``currency_code``) or a category the
            user can't use (``category_id``)
    """
    currency_code = expense_in.currency_code or settings.DEFAULT_EXPENSE_CURRENCY
    if not await currency_exists(db, currency_code):
        raise ValidationError.for_field("currency_code", f"Currency '{currency_code}' not found.")

    category = await CategoryRepository(Category, db).get_visible_by_id(
        expense_in.category_id, user_id
    )
    if category is None:
        raise ValidationError.for_field("category_id", "Category not found.")

    return {
        "category_id": category.id,
        "currency_code": currency_code,
        "amount": expense_in.amount,
        "description": expense_in.description,
        "date": expense_in.date,
    }


async def get_expense(db: AsyncSession, user_id: int, expense_id: int) -> Expense:
    """Get one of the user's expenses with its category.

    Raises:
        NotFoundError: The expense doesn't exist or belongs to another user
    """
    expense = await ExpenseRepository(Expense, db).get_by_id_and_user(expense_id, user_id)
    if expense is None:
        raise NotFoundError("Expense not found")
    return expense


async def create_expense(db: AsyncSession, user_id: int, expense_in: ExpenseCreate) -> Expense:
    """Record a new expense.

    Raises:
        ValidationError: Unknown currency or unusable category
    """
    fields = await _validated_fields(db, user_id, expense_in)

    repo = ExpenseRepository(Expense, db)
    async with transactional(db):
        expense = await repo.create(obj_in={"user_id": user_id, **fields})

    await db.refresh(expense, attribute_names=["category"])
    logger.info(f"Created expense {expense.id} (user {user_id})")
    return expense


async def update_expense(
    db: AsyncSession, user_id: int, expense_id: int, expense_in: ExpenseUpdate
) -> Expense:
    """Replace the fields of one of the user's expenses.

    Raises:
        NotFoundError: The expense doesn't exist or belongs to another user
        ValidationError: Unknown currency or unusable category
    """
    expense = await get_expense(db, user_id, expense_id)
    fields = await _validated_fields(db, user_id, expense_in)

    repo = ExpenseRepository(Expense, db)
    async with transactional(db):
        expense = await repo.update(db_obj=expense, obj_in=fields)

    await db.refresh(expense, attribute_names=["category"])
    logger.info(f"Updated expense {expense_id} (user {user_id})")
    return expense


async def delete_expense(db: AsyncSession, user_id: int, expense_id: int) -> None:
    """Delete one of the user's expenses.

    Raises:
        NotFoundError: The expense doesn't exist or belongs to another user
    """
    expense = await get_expense(db, user_id, expense_id)

    async with transactional(db):
        await ExpenseRepository(Expense, db).remove(db_obj=expense)

    logger.info(f"Deleted expense {expense_id} (user {user_id})")
