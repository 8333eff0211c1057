"""Exchange rate resolution, conversion and rate management.

Rates are user-defined and dated. To convert an amount from one currency to
another as of a date, the resolver walks an ordered chain:

1. Same currency (case-insensitive): identity, no lookup.
2. Direct rate ``from -> to`` effective on or before the date.
3. Reverse rate ``to -> from`` effective on or before the date, inverted and
   rounded to 6 places.
4. Identity (1.0) when no rate exists in either direction.

Step 4 never raises: a missing rate degrades the conversion to 1:1. Callers
that need to know whether that happened inspect the typed resolution
(``IdentityRate.same_currency`` is False for the fallback).
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import MoneyConstants
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import transactional
from app.models.exchange_rate import ExchangeRate
from app.repositories.exchange_rate import ExchangeRateRepository
from app.schemas.exchange_rate import ExchangeRateCreate, ExchangeRateUpdate
from app.services.currency_service import currency_exists, normalize_code
from app.services.money import round_money, round_rate

logger = logging.getLogger(__name__)

DUPLICATE_RATE_MESSAGE = "A rate for this currency pair and date already exists."
NON_POSITIVE_RATE_MESSAGE = "Rate must be greater than zero."
RATE_TOO_LARGE_MESSAGE = f"Rate must be less than {MoneyConstants.MAX_RATE}."
INVALID_RATE_MESSAGE = "Rate must be a finite number."


class StoredRate(Protocol):
    """Anything carrying a stored rate value."""

    rate: Decimal


class RateStore(Protocol):
    """Lookup contract the resolver needs from the rate store."""

    async def find_rate(
        self, user_id: int, from_code: str, to_code: str, as_of: date
    ) -> StoredRate | None: ...


@dataclass(frozen=True)
class DirectRate:
    """A stored rate for exactly the requested pair."""

    rate: Decimal

    @property
    def factor(self) -> Decimal:
        return self.rate


@dataclass(frozen=True)
class InvertedRate:
    """A stored rate for the reverse pair, used reciprocally."""

    source_rate: Decimal

    @property
    def factor(self) -> Decimal:
        return round_rate(MoneyConstants.IDENTITY_RATE / self.source_rate)


@dataclass(frozen=True)
class IdentityRate:
    """A 1:1 conversion.

    ``same_currency`` is True when the pair is trivial and False when no rate
    data exists in either direction.
    """

    same_currency: bool = False

    @property
    def factor(self) -> Decimal:
        return MoneyConstants.IDENTITY_RATE


RateResolution = DirectRate | InvertedRate | IdentityRate


async def resolve_rate(
    store: RateStore,
    user_id: int,
    from_code: str,
    to_code: str,
    as_of: date,
) -> RateResolution:
    """Resolve the conversion from one currency to another on a date.

    Args:
        store: Rate store to query (usually an ExchangeRateRepository)
        user_id: Owner of the rates
        from_code: Source currency code
        to_code: Target currency code
        as_of: Date the rate must be effective on

    Returns:
        DirectRate, InvertedRate or IdentityRate

    Example:
        >>> resolution = await resolve_rate(repo, 1, "USD", "EUR", date(2025, 1, 2))
        >>> # only EUR->USD 1.05 is stored
        >>> resolution
        InvertedRate(source_rate=Decimal('1.050000'))
        >>> resolution.factor
        Decimal('0.952381')
    """
    from_code = normalize_code(from_code)
    to_code = normalize_code(to_code)

    if from_code == to_code:
        return IdentityRate(same_currency=True)

    direct = await store.find_rate(user_id, from_code, to_code, as_of)
    if direct is not None:
        return DirectRate(direct.rate)

    reverse = await store.find_rate(user_id, to_code, from_code, as_of)
    if reverse is not None and reverse.rate != 0:
        return InvertedRate(reverse.rate)

    logger.warning(
        f"No exchange rate for {from_code}->{to_code} on {as_of} (user {user_id}), "
        "converting 1:1"
    )
    return IdentityRate()


async def get_exchange_rate(
    store: RateStore,
    user_id: int,
    from_code: str,
    to_code: str,
    as_of: date,
) -> Decimal:
    """Get the conversion factor for a currency pair on a date.

    Example:
        >>> rate = await get_exchange_rate(repo, user.id, "EUR", "USD", date(2025, 1, 2))
        >>> print(f"1 EUR = {rate} USD")
        1 EUR = 1.050000 USD
    """
    resolution = await resolve_rate(store, user_id, from_code, to_code, as_of)
    return resolution.factor


async def convert_amount(
    store: RateStore,
    user_id: int,
    amount: Decimal,
    from_code: str,
    to_code: str,
    as_of: date,
) -> Decimal:
    """Convert an amount, rounding the result to 2 decimal places half-up.

    Never fails for missing rates; see the module docstring.

    Example:
        >>> await convert_amount(repo, user.id, Decimal("100.00"), "EUR", "USD", date(2025, 1, 2))
        Decimal('105.00')
    """
    factor = await get_exchange_rate(store, user_id, from_code, to_code, as_of)
    return round_money(amount * factor)


@dataclass
class MemoizedRateResolver:
    """Resolver that remembers resolutions for the lifetime of one pass.

    The dashboard converts many expenses that share a currency and date; this
    avoids repeating identical lookups. Results are identical to calling
    ``resolve_rate`` each time. Create one per request; never share it.
    """

    store: RateStore
    user_id: int
    _resolved: dict[tuple[str, str, date], RateResolution] = field(default_factory=dict)

    async def resolve(self, from_code: str, to_code: str, as_of: date) -> RateResolution:
        key = (normalize_code(from_code), normalize_code(to_code), as_of)
        if key not in self._resolved:
            self._resolved[key] = await resolve_rate(self.store, self.user_id, *key)
        return self._resolved[key]

    async def convert(
        self, amount: Decimal, from_code: str, to_code: str, as_of: date
    ) -> Decimal:
        resolution = await self.resolve(from_code, to_code, as_of)
        return round_money(amount * resolution.factor)


# ---------------------------------------------------------------------------
# Rate management
# ---------------------------------------------------------------------------


def _check_rate(rate: Decimal, errors: dict[str, list[str]]) -> Decimal:
    """Quantize a rate to 6 places, recording a ``rate`` error if it can't be stored."""
    if not rate.is_finite():
        errors["rate"] = [INVALID_RATE_MESSAGE]
        return rate
    if rate <= 0:
        errors["rate"] = [NON_POSITIVE_RATE_MESSAGE]
        return rate
    if rate >= MoneyConstants.MAX_RATE:
        errors["rate"] = [RATE_TOO_LARGE_MESSAGE]
        return rate

    quantized = round_rate(rate)
    if quantized <= 0:
        errors["rate"] = [NON_POSITIVE_RATE_MESSAGE]
    elif quantized >= MoneyConstants.MAX_RATE:
        errors["rate"] = [RATE_TOO_LARGE_MESSAGE]
    return quantized


async def list_rates(db: AsyncSession, user_id: int) -> list[ExchangeRate]:
    """List a user's rates, newest effective date first."""
    repo = ExchangeRateRepository(ExchangeRate, db)
    return await repo.get_by_user(user_id)


async def create_rate(
    db: AsyncSession,
    user_id: int,
    rate_in: ExchangeRateCreate,
) -> ExchangeRate:
    """Validate and store a new exchange rate.

    Raises:
        ValidationError: Missing or unknown currency, identical pair,
            non-positive rate, or a rate already stored for the pair and date
    """
    from_code = normalize_code(rate_in.from_currency_code)
    to_code = normalize_code(rate_in.to_currency_code)

    errors: dict[str, list[str]] = {}
    if not from_code:
        errors["from_currency_code"] = ["From currency is required."]
    if not to_code:
        errors["to_currency_code"] = ["To currency is required."]
    if from_code and to_code and from_code == to_code:
        errors["to_currency_code"] = ["From and To currencies must be different."]
    rate_value = _check_rate(rate_in.rate, errors)
    if errors:
        raise ValidationError("Invalid exchange rate", errors=errors)

    for field_name, code in (("from_currency_code", from_code), ("to_currency_code", to_code)):
        if not await currency_exists(db, code):
            raise ValidationError.for_field(field_name, f"Currency '{code}' not found.")

    repo = ExchangeRateRepository(ExchangeRate, db)
    if await repo.exists_duplicate(user_id, from_code, to_code, rate_in.effective_date):
        raise ValidationError.for_field("effective_date", DUPLICATE_RATE_MESSAGE)

    try:
        async with transactional(db):
            rate = await repo.create(
                obj_in={
                    "user_id": user_id,
                    "from_currency_code": from_code,
                    "to_currency_code": to_code,
                    "rate": rate_value,
                    "effective_date": rate_in.effective_date,
                }
            )
    except IntegrityError as e:
        raise ValidationError.for_field("effective_date", DUPLICATE_RATE_MESSAGE) from e

    logger.info(
        f"Created rate {from_code}->{to_code} = {rate_value} "
        f"effective {rate_in.effective_date} (user {user_id})"
    )
    return rate


async def update_rate(
    db: AsyncSession,
    user_id: int,
    rate_id: int,
    rate_in: ExchangeRateUpdate,
) -> ExchangeRate:
    """Change the rate value and effective date of an existing rate.

    Raises:
        NotFoundError: The rate doesn't exist or belongs to another user
        ValidationError: Non-positive rate, or the new date collides with
            another rate for the same pair
    """
    repo = ExchangeRateRepository(ExchangeRate, db)
    rate = await repo.get_by_id_and_user(rate_id, user_id)
    if rate is None:
        raise NotFoundError("Exchange rate not found")

    errors: dict[str, list[str]] = {}
    rate_value = _check_rate(rate_in.rate, errors)
    if errors:
        raise ValidationError("Invalid exchange rate", errors=errors)

    if await repo.exists_duplicate(
        user_id,
        rate.from_currency_code,
        rate.to_currency_code,
        rate_in.effective_date,
        exclude_id=rate.id,
    ):
        raise ValidationError.for_field("effective_date", DUPLICATE_RATE_MESSAGE)

    try:
        async with transactional(db):
            rate = await repo.update(
                db_obj=rate,
                obj_in={"rate": rate_value, "effective_date": rate_in.effective_date},
            )
    except IntegrityError as e:
        raise ValidationError.for_field("effective_date", DUPLICATE_RATE_MESSAGE) from e

    logger.info(f"Updated rate {rate_id} (user {user_id})")
    return rate


async def delete_rate(db: AsyncSession, user_id: int, rate_id: int) -> None:
    """Delete one of the user's rates.

    Raises:
        NotFoundError: The rate doesn't exist or belongs to another user
    """
    repo = ExchangeRateRepository(ExchangeRate, db)
    rate = await repo.get_by_id_and_user(rate_id, user_id)
    if rate is None:
        raise NotFoundError("Exchange rate not found")

    async with transactional(db):
        await repo.remove(db_obj=rate)

    logger.info(f"Deleted rate {rate_id} (user {user_id})")
