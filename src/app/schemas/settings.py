"""User settings schemas."""

from pydantic import BaseModel, Field, field_validator

from app.core.constants import CurrencyConstants


class UserSettings(BaseModel):
    """Per-user preferences.

    ``default_currency_code`` selects the dashboard display currency; null
    means the application default.
    """

    default_currency_code: str | None = Field(None, max_length=CurrencyConstants.CODE_LENGTH)

    @field_validator("default_currency_code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        return value.strip().upper() if value else None
