"""
Test fixtures for the Payment Gateway test suite.

This module provides shared fixtures used across all test files:

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - bank: Deterministic stub bank (authorizes by default)
  - client: Async HTTP test client wired to the test database and stub bank
  - valid_payment: A JSON body that passes every validation rule

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database.
  - We override FastAPI's get_db and get_bank_client dependencies, so the
    router, validator, service and store run exactly as in production.
"""

import uuid
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.clients.bank import BankClient
from app.database import Base, get_db
from app.dependencies import get_bank_client
from app.exceptions import AcquiringBankError
from app.main import app
from app.schemas.payment import PaymentRequest, PaymentStatus


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"

VALID_CARD_NUMBER = "4532015112830366"


class StubBankClient(BankClient):
    """
    Bank that answers from a script instead of the network.

    `outcome` is a PaymentStatus to return, an exception to raise, or a
    callable taking the payment id and returning either. Every call is
    recorded in `calls`.
    """

    def __init__(self, outcome=PaymentStatus.AUTHORIZED):
        self.outcome = outcome
        self.calls: list[tuple[uuid.UUID, PaymentRequest]] = []

    async def authorize(self, payment_id, request):
        self.calls.append((payment_id, request))
        outcome = self.outcome(payment_id) if callable(self.outcome) else self.outcome
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def fail_with_null_body(self):
        """Answer like the HTTP client does when the bank returns no body."""
        self.outcome = lambda payment_id: AcquiringBankError(
            payment_id, "bank returned null body"
        )

    @property
    def last_payment_id(self) -> uuid.UUID:
        return self.calls[-1][0]


@pytest.fixture
def next_year() -> int:
    return datetime.now(timezone.utc).year + 1


@pytest.fixture
def valid_payment(next_year) -> dict:
    """Request body that passes every validation rule."""
    return {
        "card_number": VALID_CARD_NUMBER,
        "expiry_month": 12,
        "expiry_year": next_year,
        "currency": "USD",
        "amount": 100,
        "cvv": "123",
    }


@pytest.fixture
def bank() -> StubBankClient:
    return StubBankClient()


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    # StaticPool keeps one connection so every session sees the same in-memory DB
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine, bank):
    """
    Async HTTP test client with the test database and stub bank injected.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_bank_client] = lambda: bank

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
