"""Integration tests for the dashboard endpoint."""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category
from app.models.expense import Expense
from app.models.user import User

DASHBOARD_URL = "/api/v1/dashboard/"


async def seed_january(
    client: AsyncClient, auth_headers: dict[str, str], test_db: AsyncSession, user: User, category: Category
) -> None:
    for payload in (
        {"from_currency_code": "EUR", "to_currency_code": "USD", "rate": "1.05", "effective_date": "2025-01-01"},
        {"from_currency_code": "EUR", "to_currency_code": "USD", "rate": "1.20", "effective_date": "2025-01-28"},
    ):
        response = await client.post("/api/v1/exchange-rates/", json=payload, headers=auth_headers)
        assert response.status_code == 201

    test_db.add_all(
        [
            Expense(
                user_id=user.id,
                category_id=category.id,
                currency_code="EUR",
                amount=Decimal("100.00"),
                description="Groceries",
                date=date(2025, 1, 2),
            ),
            Expense(
                user_id=user.id,
                category_id=category.id,
                currency_code="EUR",
                amount=Decimal("100.00"),
                description="More groceries",
                date=date(2025, 1, 29),
            ),
        ]
    )
    await test_db.commit()


@pytest.mark.integration
async def test_dashboard_converts_with_historical_rates(
    client: AsyncClient,
    auth_headers: dict[str, str],
    test_db: AsyncSession,
    test_user: User,
    food_category: Category,
) -> None:
    """Test the month total uses each expense's own rate."""
    await seed_january(client, auth_headers, test_db, test_user, food_category)

    response = await client.get(
        DASHBOARD_URL, params={"month": 1, "year": 2025, "currency": "usd"}, headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["display_currency"] == "USD"
    assert data["display_symbol"] == "$"
    assert Decimal(data["total_spent"]) == Decimal("225.00")
    assert data["transaction_count"] == 2
    assert data["top_category"] == "Groceries"
    assert data["category_breakdown"][0]["percentage"] == 100.0
    assert Decimal(data["highest_expense"]["amount"]) == Decimal("120.00")
    assert [d["date"] for d in data["daily_spending"]] == ["2025-01-02", "2025-01-29"]


@pytest.mark.integration
async def test_dashboard_uses_user_default_currency(
    client: AsyncClient,
    auth_headers: dict[str, str],
    test_db: AsyncSession,
    test_user: User,
    food_category: Category,
) -> None:
    """Test the user's default currency applies when none is requested."""
    await seed_january(client, auth_headers, test_db, test_user, food_category)
    response = await client.put(
        "/api/v1/settings/", json={"default_currency_code": "USD"}, headers=auth_headers
    )
    assert response.status_code == 200

    response = await client.get(
        DASHBOARD_URL, params={"month": 1, "year": 2025}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["display_currency"] == "USD"
    assert Decimal(response.json()["total_spent"]) == Decimal("225.00")


@pytest.mark.integration
async def test_dashboard_falls_back_to_application_default(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    """Test EUR is used when neither the request nor the user picks a currency."""
    response = await client.get(
        DASHBOARD_URL, params={"month": 1, "year": 2025}, headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["display_currency"] == "EUR"
    assert data["display_symbol"] == "€"
    assert data["transaction_count"] == 0
    assert data["highest_expense"] is None
    assert data["category_breakdown"] == []


@pytest.mark.integration
async def test_dashboard_defaults_to_current_month(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    """Test omitting month and year returns the current month."""
    response = await client.get(DASHBOARD_URL, headers=auth_headers)

    assert response.status_code == 200


@pytest.mark.integration
async def test_dashboard_unknown_currency(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    """Test an unknown display currency is a validation error."""
    response = await client.get(DASHBOARD_URL, params={"currency": "XYZ"}, headers=auth_headers)

    assert response.status_code == 400
    assert "currency" in response.json()["errors"]


@pytest.mark.integration
@pytest.mark.parametrize(
    ("params", "field"),
    [
        ({"month": 0, "year": 2025}, "month"),
        ({"month": 13, "year": 2025}, "month"),
        ({"month": 1, "year": 1999}, "year"),
        ({"month": 1, "year": datetime.now(UTC).year + 2}, "year"),
    ],
)
async def test_dashboard_invalid_period(
    client: AsyncClient, auth_headers: dict[str, str], params: dict, field: str
) -> None:
    """Test out-of-range periods are rejected per field."""
    response = await client.get(DASHBOARD_URL, params=params, headers=auth_headers)

    assert response.status_code == 400
    assert field in response.json()["errors"]


@pytest.mark.integration
async def test_dashboard_requires_auth(client: AsyncClient) -> None:
    """Test the dashboard rejects anonymous requests."""
    response = await client.get(DASHBOARD_URL)

    assert response.status_code == 401
