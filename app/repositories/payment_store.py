"""
Payment store — lookup and insert of payment records by id.

The payment service depends only on the PaymentStore interface. Two
implementations exist:

  - SqlAlchemyPaymentStore: the payments table, via the request's session
  - InMemoryPaymentStore: a dict, for tests and embedding

Ids are fresh UUID4s, so concurrent requests never write the same key and no
read-modify-write locking is needed; each add/get is a single operation.
There is deliberately no update or delete.
"""

import uuid
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.payment import Payment
from app.schemas.payment import PaymentRecord


class PaymentStore(ABC):
    """Abstract key-value store of payment records."""

    @abstractmethod
    async def add(self, record: PaymentRecord) -> None:
        """Persist a new record."""

    @abstractmethod
    async def get(self, payment_id: uuid.UUID) -> PaymentRecord | None:
        """Return the record stored under payment_id, or None."""


class SqlAlchemyPaymentStore(PaymentStore):
    """PaymentStore backed by the payments table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, record: PaymentRecord) -> None:
        self.db.add(
            Payment(
                id=record.id,
                status=record.status.value,
                card_number_last_four=record.card_number_last_four,
                expiry_month=record.expiry_month,
                expiry_year=record.expiry_year,
                currency=record.currency,
                amount=record.amount,
            )
        )
        await self.db.flush()

    async def get(self, payment_id: uuid.UUID) -> PaymentRecord | None:
        result = await self.db.execute(
            select(Payment).where(Payment.id == payment_id)
        )
        payment = result.scalar_one_or_none()
        if payment is None:
            return None
        return PaymentRecord.model_validate(payment)


class InMemoryPaymentStore(PaymentStore):
    """PaymentStore held in a dict. Records are frozen, so sharing them is safe."""

    def __init__(self):
        self._records: dict[uuid.UUID, PaymentRecord] = {}

    async def add(self, record: PaymentRecord) -> None:
        self._records[record.id] = record

    async def get(self, payment_id: uuid.UUID) -> PaymentRecord | None:
        return self._records.get(payment_id)

    def __len__(self) -> int:
        return len(self._records)
