"""Category schemas."""

from pydantic import BaseModel, Field, computed_field

DEFAULT_CATEGORY_COLOR = "#808080"


class CategoryCreate(BaseModel):
    """Schema for creating a user-owned category."""

    name: str = Field(..., max_length=100)
    color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")


class CategoryResponse(BaseModel):
    """Schema for category response."""

    id: int
    name: str
    color: str | None = None
    user_id: int | None = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def is_default(self) -> bool:
        """Shared default categories have no owner."""
        return self.user_id is None
