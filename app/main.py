"""
FastAPI application factory and entry point.

This module creates and configures the FastAPI application:
  1. Logging — structlog is configured before anything logs
  2. Lifespan manager — creates tables and the shared bank client on startup,
     closes them on shutdown
  3. Exception handlers — maps domain errors to HTTP responses
  4. Router registration — mounts the payment endpoints

Running locally:
    uvicorn app.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.clients.bank import BankSimulatorClient
from app.config import settings
from app.database import Base, engine, ensure_sqlite_directory
from app.exceptions import register_exception_handlers
from app.logging_config import configure_logging
from app.routers import payments

configure_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
      Creates the payments table if it doesn't exist and builds the one
      bank client shared by all requests.

    Shutdown:
      Closes the bank client's connection pool and disposes of the engine.
    """
    # --- Startup ---
    ensure_sqlite_directory(settings.DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.bank_client = BankSimulatorClient(
        base_url=settings.BANK_SIMULATOR_URL,
        timeout_seconds=settings.BANK_TIMEOUT_SECONDS,
    )
    logger.info("payment_gateway_started", version=settings.APP_VERSION)
    yield
    # --- Shutdown ---
    await app.state.bank_client.close()
    await engine.dispose()
    logger.info("payment_gateway_stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Card payment gateway: validation, bank authorization, and payment lookup",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(payments.router, prefix="/v1/payments", tags=["Payments"])


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe for load balancers and orchestrators."""
    return {"status": "ok", "version": settings.APP_VERSION}
