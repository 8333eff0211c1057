"""Pytest fixtures for testing."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.security import create_access_token, get_password_hash
from app.db.base import Base
from app.db.seed import seed_reference_data
from app.db.session import get_db
from app.models.category import Category
from app.models.user import User
from main import app

# Test database URL (SQLite in-memory for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        # SQLite leaves foreign key enforcement off per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_db(test_engine) -> AsyncGenerator[AsyncSession]:
    """Create a test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(test_db: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database override."""

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def reference_data(test_db: AsyncSession) -> None:
    """Seed the currency catalog and the default categories."""
    await seed_reference_data(test_db)


@pytest_asyncio.fixture(scope="function")
async def test_user(test_db: AsyncSession, reference_data) -> User:
    """Create a test user."""
    user = User(
        email="test@example.com",
        hashed_password=get_password_hash("TestPass123"),
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def other_user(test_db: AsyncSession, reference_data) -> User:
    """Create a second user whose data must stay invisible to test_user."""
    user = User(
        email="other@example.com",
        hashed_password=get_password_hash("OtherPass123"),
        is_active=True,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def test_inactive_user(test_db: AsyncSession, reference_data) -> User:
    """Create an inactive test user."""
    user = User(
        email="inactive@example.com",
        hashed_password=get_password_hash("InactivePass123"),
        is_active=False,
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture(scope="function")
async def food_category(test_db: AsyncSession, reference_data) -> Category:
    """A user-independent category for expenses."""
    category = Category(name="Groceries", color="#00AA00", user_id=None)
    test_db.add(category)
    await test_db.commit()
    await test_db.refresh(category)
    return category


@pytest_asyncio.fixture(scope="function")
async def travel_category(test_db: AsyncSession, reference_data) -> Category:
    """A second category for breakdown tests."""
    category = Category(name="Trips", color="#0000AA", user_id=None)
    test_db.add(category)
    await test_db.commit()
    await test_db.refresh(category)
    return category


@pytest.fixture(scope="function")
def user_token(test_user: User) -> str:
    """Generate a valid access token for test user."""
    return create_access_token(data={"sub": str(test_user.id)})


@pytest.fixture(scope="function")
def auth_headers(user_token: str) -> dict[str, str]:
    """Generate authorization headers with user token."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture(scope="function")
def other_auth_headers(other_user: User) -> dict[str, str]:
    """Generate authorization headers for the second user."""
    token = create_access_token(data={"sub": str(other_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def inactive_user_auth_headers(test_inactive_user: User) -> dict[str, str]:
    """Generate authorization headers with inactive user token."""
    token = create_access_token(data={"sub": str(test_inactive_user.id)})
    return {"Authorization": f"Bearer {token}"}
