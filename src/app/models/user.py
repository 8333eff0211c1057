"""User model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.exchange_rate import ExchangeRate


class User(Base, TimestampMixin):
    """User model.

    ``default_currency_code`` is the dashboard display currency used when a
    request doesn't name one.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(256), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    default_currency_code: Mapped[str | None] = mapped_column(
        String(3), ForeignKey("currencies.code", ondelete="SET NULL"), nullable=True
    )

    # Relationships
    exchange_rates: Mapped[list["ExchangeRate"]] = relationship(
        "ExchangeRate",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
