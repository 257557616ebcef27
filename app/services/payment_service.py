"""
Payment service — processing and retrieval of card payments.

Processing a validated request:
  1. A fresh UUID4 is generated as the payment id
  2. The bank client is asked to authorize (id, request)
  3. A PaymentRecord is built from the bank's status and the request fields
     (last four digits only, never the full card number or CVV)
  4. AUTHORIZED and DECLINED records are persisted; any other status is
     returned to the caller without being stored

AcquiringBankError from the bank client propagates unchanged: no retry, no
partial record. Records are never updated after they are stored.
"""

import uuid

import structlog

from app.clients.bank import BankClient
from app.exceptions import PaymentNotFoundError
from app.repositories.payment_store import PaymentStore
from app.schemas.payment import PaymentRecord, PaymentRequest, PaymentStatus

logger = structlog.get_logger(__name__)

# Only outcomes the bank actually adjudicated enter the durable record
PERSISTED_STATUSES = frozenset({PaymentStatus.AUTHORIZED, PaymentStatus.DECLINED})


class PaymentService:
    """
    Orchestrates one payment from validated request to stored record.

    Args:
        bank_client: The acquiring bank.
        store: Where processed payments are kept.
    """

    def __init__(self, bank_client: BankClient, store: PaymentStore):
        self.bank_client = bank_client
        self.store = store

    async def process_payment(self, request: PaymentRequest) -> PaymentRecord:
        """
        Authorize a payment with the bank and record the outcome.

        The request must already have passed PaymentRequestValidator.

        Returns:
            The PaymentRecord, whether or not it was persisted.

        Raises:
            AcquiringBankError: The bank failed; nothing was stored.
        """
        payment_id = uuid.uuid4()
        logger.info("payment_processing_started", payment_id=str(payment_id))

        status = await self.bank_client.authorize(payment_id, request)

        record = PaymentRecord(
            id=payment_id,
            status=status,
            card_number_last_four=request.card_number_last_four,
            expiry_month=request.expiry_month,
            expiry_year=request.expiry_year,
            currency=request.currency,
            amount=request.amount,
        )

        if status in PERSISTED_STATUSES:
            await self.store.add(record)
            logger.info(
                "payment_processed",
                payment_id=str(payment_id),
                status=status.value,
            )
        else:
            logger.warning(
                "payment_not_persisted",
                payment_id=str(payment_id),
                status=status.value,
            )
        return record

    async def get_payment(self, payment_id: uuid.UUID) -> PaymentRecord:
        """
        Look up a processed payment.

        Raises:
            PaymentNotFoundError: No payment is stored under payment_id.
        """
        logger.info("payment_lookup", payment_id=str(payment_id))
        record = await self.store.get(payment_id)
        if record is None:
            logger.warning("payment_not_found", payment_id=str(payment_id))
            raise PaymentNotFoundError(payment_id)
        return record
