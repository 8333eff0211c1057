"""Dashboard route."""

from fastapi import APIRouter, Query

from app.core.deps import CurrentActiveUser, DbSession, Period
from app.db.session import read_only_transaction
from app.schemas.dashboard import DashboardResponse
from app.services import currency_service, dashboard_service

router = APIRouter()


@router.get("/", response_model=DashboardResponse)
async def get_dashboard(
    current_user: CurrentActiveUser,
    db: DbSession,
    period: Period,
    currency: str | None = Query(None, description="Display currency code"),
) -> DashboardResponse:
    """
    Get aggregated spending for a month, converted to one display currency.

    The display currency is the ``currency`` parameter, else the user's
    default currency, else the application default.

    Example:
        GET /api/v1/dashboard/?month=1&year=2025&currency=USD

    Raises:
        ValidationError: 400 on an invalid period or unknown currency
    """
    month, year = period
    display_currency, display_symbol = await currency_service.resolve_display_currency(
        db, current_user, currency
    )

    async with read_only_transaction(db):
        return await dashboard_service.build_dashboard(
            db,
            current_user.id,
            month,
            year,
            display_currency,
            display_symbol,
        )
