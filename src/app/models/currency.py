"""Currency model for the catalog of supported currencies (USD, EUR, GBP, etc.)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Currency(Base):
    """Currency reference data.

    Currencies are seeded at startup from ISO 4217 codes and are never
    modified through user-facing endpoints.

    Attributes:
        code: ISO 4217 currency code (e.g., "USD", "EUR") - primary key
        name: Full name of the currency (e.g., "US Dollar")
        symbol: Currency symbol (e.g., "$", "€", "£")
    """

    __tablename__ = "currencies"

    code: Mapped[str] = mapped_column(String(3), primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
    symbol: Mapped[str] = mapped_column(String(5))
