"""Exchange rate model for user-defined, dated currency conversion rates."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from app.models.user import User


class ExchangeRate(Base, CreatedAtMixin):
    """A user's exchange rate for a currency pair, effective from a given date.

    A rate stays in effect until a later-dated record for the same pair
    supersedes it. Rates are private to their owner.

    Attributes:
        id: Unique identifier for the rate
        user_id: Owner of the rate
        from_currency_code: Source currency code (e.g., "EUR")
        to_currency_code: Target currency code (e.g., "USD")
        rate: Units of the target currency per unit of the source (1 EUR = 1.05 USD)
        effective_date: First date on which this rate applies
        created_at: Timestamp when the rate was created
    """

    __tablename__ = "exchange_rates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    from_currency_code: Mapped[str] = mapped_column(
        String(3), ForeignKey("currencies.code", ondelete="RESTRICT")
    )
    to_currency_code: Mapped[str] = mapped_column(
        String(3), ForeignKey("currencies.code", ondelete="RESTRICT")
    )
    rate: Mapped[Decimal] = mapped_column(Numeric(18, 6))
    effective_date: Mapped[date] = mapped_column(Date)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="exchange_rates")

    # Constraints
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "from_currency_code",
            "to_currency_code",
            "effective_date",
            name="uq_exchange_rate_user_pair_date",
        ),
        CheckConstraint("rate > 0", name="ck_exchange_rate_positive"),
        CheckConstraint(
            "from_currency_code <> to_currency_code", name="ck_exchange_rate_distinct_pair"
        ),
        Index(
            "ix_exchange_rates_lookup",
            "user_id",
            "from_currency_code",
            "to_currency_code",
            "effective_date",
        ),
    )
