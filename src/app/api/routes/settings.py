"""User settings routes."""

from fastapi import APIRouter

from app.core.deps import CurrentActiveUser, DbSession
from app.schemas.settings import UserSettings
from app.services import user_service

router = APIRouter()


@router.get("/", response_model=UserSettings)
async def get_settings(current_user: CurrentActiveUser, db: DbSession) -> UserSettings:
    """Get the user's settings (default display currency)."""
    return await user_service.get_settings(db, current_user.id)


@router.put("/", response_model=UserSettings)
async def update_settings(
    settings_in: UserSettings,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> UserSettings:
    """
    Update the user's settings.

    Example:
        PUT /api/v1/settings/
        {"default_currency_code": "GBP"}

    Raises:
        ValidationError: 400 if the currency is unknown
    """
    return await user_service.update_settings(db, current_user, settings_in)
