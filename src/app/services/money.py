"""Money and rate rounding helpers.

Centralized so the converter, the dashboard and rate management use identical
rounding semantics: half-up (not banker's) rounding on Decimal values.
"""

from decimal import ROUND_HALF_UP, Context, Decimal

from app.core.constants import MoneyConstants

# Enough precision to quantize any product of a stored amount and a stored rate
_QUANTIZE_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)


def round_money(value: Decimal) -> Decimal:
    """Round an amount to 2 decimal places, half-up."""
    return value.quantize(MoneyConstants.MONEY_QUANTUM, context=_QUANTIZE_CONTEXT)


def round_rate(value: Decimal) -> Decimal:
    """Round an exchange rate to 6 decimal places, half-up."""
    return value.quantize(MoneyConstants.RATE_QUANTUM, context=_QUANTIZE_CONTEXT)


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100`` rounded to 2 places, or 0 if ``whole`` is not positive."""
    if whole <= 0:
        return MoneyConstants.ZERO
    return (part / whole * 100).quantize(MoneyConstants.PERCENT_QUANTUM, context=_QUANTIZE_CONTEXT)
