"""
FastAPI dependencies for the payment endpoints.

The dependency chain wires configuration into the payment pipeline:

  get_request_validator                      (settings -> validator)
  get_payment_service
      ├── get_bank_client  (app.state -> BankClient, built in the lifespan)
      └── get_payment_store (get_db -> SqlAlchemyPaymentStore)

Tests override get_bank_client with a stub bank and get_db with an in-memory
SQLite session; everything downstream stays the production code path.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients.bank import BankClient
from app.config import settings
from app.database import get_db
from app.repositories.payment_store import PaymentStore, SqlAlchemyPaymentStore
from app.services.payment_service import PaymentService
from app.validation.payment_request import PaymentRequestValidator


def get_bank_client(request: Request) -> BankClient:
    """The shared bank client created at startup."""
    return request.app.state.bank_client


def get_payment_store(db: AsyncSession = Depends(get_db)) -> PaymentStore:
    return SqlAlchemyPaymentStore(db)


def get_payment_service(
    bank_client: BankClient = Depends(get_bank_client),
    store: PaymentStore = Depends(get_payment_store),
) -> PaymentService:
    return PaymentService(bank_client=bank_client, store=store)


def get_request_validator() -> PaymentRequestValidator:
    return PaymentRequestValidator(supported_currencies=settings.SUPPORTED_CURRENCIES)
