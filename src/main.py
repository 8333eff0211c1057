"""FastAPI application entry point."""

import logging
import logging.config
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import (
    auth,
    categories,
    currencies,
    dashboard,
    exchange_rates,
    expenses,
    health,
    settings as user_settings,
    users,
)
from app.core.config import settings
from app.core.exceptions import AppException, app_exception_handler
from app.core.middleware import RequestLoggingMiddleware
from app.db.base import Base
from app.db.seed import seed_reference_data
from app.db.session import AsyncSessionLocal, engine

# Configure logging
logging.config.dictConfig(settings.LOGGING_CONFIG)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan events."""
    logger.info("Starting application...")

    async with engine.begin() as conn:
        # Create tables (use Alembic in production)
        if settings.ENVIRONMENT == "development":
            await conn.run_sync(Base.metadata.create_all)

    # Currencies and default categories must exist before any request
    async with AsyncSessionLocal() as db:
        inserted = await seed_reference_data(db)
        if inserted:
            logger.info(f"Seeded {inserted} reference rows")

    yield

    logger.info("Shutting down application...")
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_CREDENTIALS,
    allow_methods=settings.CORS_METHODS,
    allow_headers=settings.CORS_HEADERS,
)

# Middleware is applied in reverse order, so this is the outermost layer
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(user_settings.router, prefix="/api/v1/settings", tags=["settings"])
app.include_router(currencies.router, prefix="/api/v1/currencies", tags=["currencies"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
app.include_router(expenses.router, prefix="/api/v1/expenses", tags=["expenses"])
app.include_router(
    exchange_rates.router,
    prefix="/api/v1/exchange-rates",
    tags=["exchange-rates"],
)
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["dashboard"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
