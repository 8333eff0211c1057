"""Application-wide constants.

Money and exchange-rate precision live here so the converter, the dashboard
and the rate management endpoints all quantize the same way.
"""

from decimal import Decimal


class MoneyConstants:
    """Fixed-point precision for amounts and exchange rates."""

    # Amounts are stored and presented with 2 fractional digits
    MONEY_QUANTUM = Decimal("0.01")
    # Exchange rates are stored with 6 fractional digits
    RATE_QUANTUM = Decimal("0.000001")
    # Numeric(18, 6) leaves 12 integer digits for a stored rate
    MAX_RATE = Decimal("1000000000000")
    # Percentages in the category breakdown
    PERCENT_QUANTUM = Decimal("0.01")

    IDENTITY_RATE = Decimal("1.0")
    ZERO = Decimal("0")


class PeriodConstants:
    """Constants for month period validation (dashboard and expense listing)."""

    MIN_YEAR = 2000
    # The latest accepted year is the current year plus this offset
    MAX_YEAR_OFFSET = 1


class CurrencyConstants:
    """Constants for currency code handling."""

    CODE_LENGTH = 3
