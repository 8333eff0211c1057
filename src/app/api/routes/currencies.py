"""Currency catalog routes."""

import logging

from fastapi import APIRouter

from app.core.deps import CurrentActiveUser, DbSession
from app.models.currency import Currency
from app.schemas.currency import CurrencyResponse
from app.services import currency_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=list[CurrencyResponse])
async def list_currencies(current_user: CurrentActiveUser, db: DbSession) -> list[Currency]:
    """List all supported currencies ordered by code.

    Example:
        GET /api/v1/currencies/
    """
    currencies = await currency_service.list_currencies(db)
    logger.debug(f"Found {len(currencies)} currencies")
    return currencies
