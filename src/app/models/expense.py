"""Expense model."""

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, CreatedAtMixin
from app.models.category import Category


class Expense(Base, CreatedAtMixin):
    """A single expense recorded in its original currency."""

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    # Default NO ACTION is checked after a user delete cascades to both tables
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"))
    currency_code: Mapped[str] = mapped_column(
        String(3), ForeignKey("currencies.code", ondelete="RESTRICT"), default="EUR"
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    description: Mapped[str] = mapped_column(String(500))
    date: Mapped[dt.date] = mapped_column(Date)

    # Relationships
    category: Mapped[Category] = relationship(Category)

    __table_args__ = (Index("ix_expenses_user_date", "user_id", "date"),)
