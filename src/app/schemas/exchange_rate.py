"""Exchange rate schemas for request/response validation.

Range and pair checks (positive rate, distinct currencies, known codes) are
performed by the exchange rate service so they surface as field-tagged
validation errors.
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from app.core.constants import CurrencyConstants


class ExchangeRateCreate(BaseModel):
    """Schema for creating an exchange rate."""

    from_currency_code: str = Field("", max_length=CurrencyConstants.CODE_LENGTH)
    to_currency_code: str = Field("", max_length=CurrencyConstants.CODE_LENGTH)
    rate: Decimal
    effective_date: dt.date

    @field_validator("from_currency_code", "to_currency_code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return value.strip().upper()


class ExchangeRateUpdate(BaseModel):
    """Schema for updating an exchange rate.

    The currency pair is immutable once created; only the rate and its
    effective date can change.
    """

    rate: Decimal
    effective_date: dt.date


class ExchangeRateResponse(BaseModel):
    """Schema for exchange rate response."""

    id: int
    from_currency_code: str
    to_currency_code: str
    rate: Decimal
    effective_date: dt.date

    model_config = {"from_attributes": True}
