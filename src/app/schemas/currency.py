"""Currency schemas for response serialization."""

from pydantic import BaseModel


class CurrencyResponse(BaseModel):
    """Schema for currency response."""

    code: str
    name: str
    symbol: str

    model_config = {"from_attributes": True}
