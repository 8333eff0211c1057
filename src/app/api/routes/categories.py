"""Category routes."""

from fastapi import APIRouter, status

from app.core.deps import CurrentActiveUser, DbSession
from app.models.category import Category
from app.schemas.category import CategoryCreate, CategoryResponse
from app.services import category_service

router = APIRouter()


@router.get("/", response_model=list[CategoryResponse])
async def list_categories(current_user: CurrentActiveUser, db: DbSession) -> list[Category]:
    """List the default categories and the user's own."""
    return await category_service.list_categories(db, current_user.id)


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_in: CategoryCreate,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> Category:
    """
    Create a category of the user's own.

    Raises:
        ValidationError: 400 on a blank name
    """
    return await category_service.create_category(db, current_user.id, category_in)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> None:
    """
    Delete one of the user's categories.

    Its expenses move to the default "Other" category.

    Raises:
        NotFoundError: 404 for a default category or another user's category
    """
    await category_service.delete_category(db, current_user.id, category_id)
