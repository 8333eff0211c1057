"""Service layer for user accounts, authentication and settings."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AuthenticationError, ConflictError, ValidationError
from app.core.security import create_access_token, get_password_hash, verify_password
from app.db.session import transactional
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.auth import UserRegister
from app.schemas.settings import UserSettings
from app.services.currency_service import currency_exists

logger = logging.getLogger(__name__)


async def register_user(db: AsyncSession, user_in: UserRegister) -> User:
    """Create a new user account.

    Raises:
        ConflictError: The email is already registered
    """
    repo = UserRepository(User, db)
    email = user_in.email.strip().lower()
    if await repo.exists_by_email(email):
        raise ConflictError("Email already registered")

    async with transactional(db):
        user = await repo.create(
            obj_in={
                "email": email,
                "hashed_password": get_password_hash(user_in.password),
                "is_active": True,
            }
        )

    logger.info(f"Registered user {user.id}")
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Raises:
        AuthenticationError: Unknown email, wrong password or inactive user
    """
    user = await UserRepository(User, db).get_by_email(email)

    if not user or not verify_password(password, user.hashed_password):
        raise AuthenticationError("Incorrect email or password")

    if not user.is_active:
        raise AuthenticationError("Inactive user")

    return user


async def create_user_token(db: AsyncSession, email: str, password: str) -> str:
    """Authenticate a user and issue an access token."""
    user = await authenticate_user(db, email, password)
    return create_access_token(data={"sub": str(user.id)})


async def get_settings(db: AsyncSession, user_id: int) -> UserSettings:
    """Get the user's settings."""
    code = await UserRepository(User, db).get_default_currency_code(user_id)
    return UserSettings(default_currency_code=code)


async def update_settings(db: AsyncSession, user: User, settings_in: UserSettings) -> UserSettings:
    """Update the user's default currency.

    A null code clears the preference.

    Raises:
        ValidationError: The currency is not in the catalog
            (field ``default_currency_code``)
    """
    code = settings_in.default_currency_code
    if code is not None and not await currency_exists(db, code):
        raise ValidationError.for_field("default_currency_code", f"Currency '{code}' not found.")

    async with transactional(db):
        await UserRepository(User, db).update(db_obj=user, obj_in={"default_currency_code": code})

    logger.info(f"User {user.id} default currency set to {code}")
    return UserSettings(default_currency_code=code)
