"""Category operations.

Default categories are shared by every user and read-only. Users add and
remove their own; removing one moves its expenses to the default fallback
category so no expense is left without a category.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.data.reference_data import FALLBACK_CATEGORY_NAME
from app.db.session import transactional
from app.models.category import Category
from app.models.expense import Expense
from app.repositories.category import CategoryRepository
from app.repositories.expense import ExpenseRepository
from app.schemas.category import DEFAULT_CATEGORY_COLOR, CategoryCreate

logger = logging.getLogger(__name__)


async def list_categories(db: AsyncSession, user_id: int) -> list[Category]:
    """List default categories and the user's own."""
    return await CategoryRepository(Category, db).get_visible_to_user(user_id)


async def create_category(db: AsyncSession, user_id: int, category_in: CategoryCreate) -> Category:
    """Create a category owned by the user.

    Raises:
        ValidationError: Blank name (``name``)
    """
    name = category_in.name.strip()
    if not name:
        raise ValidationError.for_field("name", "Name is required.")

    async with transactional(db):
        category = await CategoryRepository(Category, db).create(
            obj_in={
                "user_id": user_id,
                "name": name,
                "color": category_in.color or DEFAULT_CATEGORY_COLOR,
            }
        )

    logger.info(f"Created category {category.id} (user {user_id})")
    return category


async def delete_category(db: AsyncSession, user_id: int, category_id: int) -> None:
    """Delete one of the user's categories.

    Its expenses are reassigned to the default fallback category first.

    Raises:
        NotFoundError: The category doesn't exist, is a default category, or
            belongs to another user
        ConflictError: Expenses need reassigning but the fallback category is
            missing
    """
    category_repo = CategoryRepository(Category, db)
    category = await category_repo.get_owned_by_id(category_id, user_id)
    if category is None:
        raise NotFoundError("Category not found")

    expense_repo = ExpenseRepository(Expense, db)
    async with transactional(db):
        if await expense_repo.exists_for_category(category.id):
            fallback = await category_repo.get_default_by_name(FALLBACK_CATEGORY_NAME)
            if fallback is None:
                raise ConflictError(
                    f"Default category '{FALLBACK_CATEGORY_NAME}' is missing; "
                    "cannot reassign expenses"
                )
            moved = await expense_repo.reassign_category(category.id, fallback.id)
            logger.info(f"Moved {moved} expense(s) from category {category.id} to {fallback.id}")
        await category_repo.remove(db_obj=category)

    logger.info(f"Deleted category {category_id} (user {user_id})")
