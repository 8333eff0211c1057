"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr


class UserResponse(BaseModel):
    """Schema for user response."""

    id: int
    email: EmailStr
    is_active: bool
    default_currency_code: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
