"""Database session management with transaction utilities.

This module provides:
- AsyncSession factory for dependency injection
- Transaction context managers for explicit transaction control
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    # SQLite (local runs, tests) uses a static pool without size options
    if settings.DATABASE_URL.startswith("sqlite"):
        return {"echo": settings.DB_ECHO}
    return {
        "echo": settings.DB_ECHO,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


engine = create_async_engine(settings.DATABASE_URL, **_engine_options())

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency for route handlers.

    Automatically manages the commit/rollback/close lifecycle.

    Yields:
        AsyncSession: Database session for the request
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def transactional(
    db: AsyncSession,
    *,
    commit: bool = True,
) -> AsyncGenerator[AsyncSession, None]:
    """Explicit transaction context manager with automatic commit/rollback.

    Args:
        db: The database session
        commit: Whether to commit on success (default: True)

    Yields:
        AsyncSession: The database session

    Raises:
        Exception: Re-raises any exception after rollback

    Example:
        ```python
        async with transactional(db):
            db.add(ExchangeRate(user_id=1, from_currency_code="EUR", ...))
        ```
    """
    try:
        yield db
        if commit:
            await db.commit()
            logger.debug("Transaction committed successfully")
    except Exception as e:
        await db.rollback()
        logger.error(f"Transaction rolled back due to error: {type(e).__name__}: {e}")
        raise


@asynccontextmanager
async def read_only_transaction(
    db: AsyncSession,
) -> AsyncGenerator[AsyncSession, None]:
    """Read-only transaction context manager (never commits).

    Used by the dashboard, which must have no side effects.

    Args:
        db: The database session

    Yields:
        AsyncSession: The database session
    """
    try:
        yield db
    except Exception as e:
        logger.error(f"Read-only transaction error: {type(e).__name__}: {e}")
        raise
