"""Dependencies for FastAPI routes."""

from datetime import UTC, datetime
from typing import Annotated

import jwt
from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import PeriodConstants
from app.core.exceptions import AuthenticationError, ValidationError
from app.core.security import decode_token
from app.db.session import get_db
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.auth import TokenData

# OAuth2 scheme for extracting token from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Get the current authenticated user from JWT token.

    Raises:
        AuthenticationError: If the token is invalid or the user no longer exists
    """
    try:
        payload = decode_token(token)
        subject = payload.get("sub")
        if subject is None:
            raise AuthenticationError("Could not validate credentials")
        token_data = TokenData(user_id=int(subject))
    except (jwt.InvalidTokenError, ValueError) as e:
        raise AuthenticationError("Could not validate credentials") from e

    user = await UserRepository(User, db).get(token_data.user_id)
    if user is None:
        raise AuthenticationError("Could not validate credentials")

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Get the current authenticated and active user.

    Raises:
        AuthenticationError: If the user is inactive
    """
    if not current_user.is_active:
        raise AuthenticationError("Inactive user")

    return current_user


def get_period(
    month: int | None = Query(None, description="Calendar month (1-12), defaults to now"),
    year: int | None = Query(None, description="Calendar year, defaults to now"),
) -> tuple[int, int]:
    """
    Resolve the requested calendar month, defaulting to the current UTC month.

    Returns:
        Tuple of (month, year)

    Raises:
        ValidationError: Month outside 1-12 or year outside the accepted range
    """
    now = datetime.now(UTC)
    resolved_month = month if month is not None else now.month
    resolved_year = year if year is not None else now.year
    max_year = now.year + PeriodConstants.MAX_YEAR_OFFSET

    errors: dict[str, list[str]] = {}
    if not 1 <= resolved_month <= 12:
        errors["month"] = ["Month must be between 1 and 12."]
    if not PeriodConstants.MIN_YEAR <= resolved_year <= max_year:
        errors["year"] = [f"Year must be between {PeriodConstants.MIN_YEAR} and {max_year}."]
    if errors:
        raise ValidationError("Invalid period", errors=errors)

    return resolved_month, resolved_year


# Type aliases for cleaner dependency injection
CurrentActiveUser = Annotated[User, Depends(get_current_active_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
Period = Annotated[tuple[int, int], Depends(get_period)]
