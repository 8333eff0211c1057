"""User endpoints."""

from fastapi import APIRouter

from app.core.deps import CurrentActiveUser
from app.models.user import User
from app.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentActiveUser) -> User:
    """Get the authenticated user's profile."""
    return current_user
