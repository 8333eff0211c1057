"""Exchange rate routes: CRUD over the current user's rates."""

from fastapi import APIRouter, status

from app.core.deps import CurrentActiveUser, DbSession
from app.models.exchange_rate import ExchangeRate
from app.schemas.exchange_rate import (
    ExchangeRateCreate,
    ExchangeRateResponse,
    ExchangeRateUpdate,
)
from app.services import exchange_rate_service

router = APIRouter()


@router.get("/", response_model=list[ExchangeRateResponse])
async def list_exchange_rates(current_user: CurrentActiveUser, db: DbSession) -> list[ExchangeRate]:
    """List the user's rates, newest effective date first."""
    return await exchange_rate_service.list_rates(db, current_user.id)


@router.post("/", response_model=ExchangeRateResponse, status_code=status.HTTP_201_CREATED)
async def create_exchange_rate(
    rate_in: ExchangeRateCreate,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> ExchangeRate:
    """
    Create an exchange rate.

    Example:
        POST /api/v1/exchange-rates/
        {
            "from_currency_code": "EUR",
            "to_currency_code": "USD",
            "rate": "1.05",
            "effective_date": "2025-01-01"
        }

    Raises:
        ValidationError: 400 on an invalid pair, rate or duplicate date
    """
    return await exchange_rate_service.create_rate(db, current_user.id, rate_in)


@router.put("/{rate_id}", response_model=ExchangeRateResponse)
async def update_exchange_rate(
    rate_id: int,
    rate_in: ExchangeRateUpdate,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> ExchangeRate:
    """
    Update the rate and effective date of an exchange rate.

    Raises:
        NotFoundError: 404 if the rate is not one of the user's
        ValidationError: 400 on an invalid rate or duplicate date
    """
    return await exchange_rate_service.update_rate(db, current_user.id, rate_id, rate_in)


@router.delete("/{rate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exchange_rate(
    rate_id: int,
    current_user: CurrentActiveUser,
    db: DbSession,
) -> None:
    """
    Delete an exchange rate.

    Raises:
        NotFoundError: 404 if the rate is not one of the user's
    """
    await exchange_rate_service.delete_rate(db, current_user.id, rate_id)
