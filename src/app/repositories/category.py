"""Category repository."""

from sqlalchemy import or_, select

from app.models.category import Category
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category.

    A user sees the shared default categories plus their own.
    """

    async def get_visible_to_user(self, user_id: int) -> list[Category]:
        """Get default and user-owned categories ordered by name."""
        result = await self.db.execute(
            select(Category)
            .where(or_(Category.user_id.is_(None), Category.user_id == user_id))
            .order_by(Category.name, Category.id)
        )
        return list(result.scalars().all())

    async def get_visible_by_id(self, category_id: int, user_id: int) -> Category | None:
        """Get a category if it is a default one or owned by the user."""
        result = await self.db.execute(
            select(Category).where(
                Category.id == category_id,
                or_(Category.user_id.is_(None), Category.user_id == user_id),
            )
        )
        return result.scalar_one_or_none()

    async def get_default_names(self) -> set[str]:
        """Get the names of the shared default categories."""
        result = await self.db.execute(select(Category.name).where(Category.user_id.is_(None)))
        return set(result.scalars().all())

    async def get_owned_by_id(self, category_id: int, user_id: int) -> Category | None:
        """Get a category only if the user owns it (defaults are never owned)."""
        result = await self.db.execute(
            select(Category).where(Category.id == category_id, Category.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_default_by_name(self, name: str) -> Category | None:
        """Get a shared default category by name."""
        result = await self.db.execute(
            select(Category).where(Category.user_id.is_(None), Category.name == name)
        )
        return result.scalars().first()
