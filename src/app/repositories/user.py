"""User repository for user-specific database operations."""

from sqlalchemy import exists, select

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model.

    Example:
        >>> repo = UserRepository(User, db)
        >>> user = await repo.get_by_email("test@example.com")
    """

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (case-insensitive)."""
        result = await self.db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with this email exists."""
        result = await self.db.execute(
            select(exists().where(User.email == email.strip().lower()))
        )
        return bool(result.scalar())

    async def get_default_currency_code(self, user_id: int) -> str | None:
        """Get the user's default display currency code, if set."""
        result = await self.db.execute(
            select(User.default_currency_code).where(User.id == user_id)
        )
        return result.scalar_one_or_none()
