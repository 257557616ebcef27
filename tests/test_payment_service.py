"""
Tests for PaymentService against the in-memory store and a stub bank.

These tests verify:
  - Each payment gets a fresh id, which is the id sent to the bank
  - AUTHORIZED and DECLINED records are stored and retrievable
  - Any other status is returned but not stored
  - AcquiringBankError propagates with nothing stored
  - Unknown ids raise PaymentNotFoundError
"""

import uuid

import pytest

from app.exceptions import AcquiringBankError, PaymentNotFoundError
from app.repositories.payment_store import InMemoryPaymentStore
from app.schemas.payment import PaymentRecord, PaymentRequest, PaymentStatus
from app.services.payment_service import PaymentService
from tests.conftest import StubBankClient


@pytest.fixture
def store():
    return InMemoryPaymentStore()


@pytest.fixture
def payment_request(next_year):
    return PaymentRequest(
        card_number="4532015112830366",
        expiry_month=12,
        expiry_year=next_year,
        currency="USD",
        amount=100,
        cvv="123",
    )


class TestProcessPayment:
    async def test_authorized_payment_is_stored(self, store, payment_request, next_year):
        bank = StubBankClient(PaymentStatus.AUTHORIZED)
        service = PaymentService(bank, store)

        record = await service.process_payment(payment_request)

        assert record.status == PaymentStatus.AUTHORIZED
        assert record.card_number_last_four == "0366"
        assert record.expiry_month == 12
        assert record.expiry_year == next_year
        assert record.currency == "USD"
        assert record.amount == 100
        assert await store.get(record.id) == record

    async def test_declined_payment_is_stored(self, store, payment_request):
        service = PaymentService(StubBankClient(PaymentStatus.DECLINED), store)

        record = await service.process_payment(payment_request)

        assert record.status == PaymentStatus.DECLINED
        assert await store.get(record.id) == record

    async def test_rejected_status_is_returned_but_not_stored(self, store, payment_request):
        service = PaymentService(StubBankClient(PaymentStatus.REJECTED), store)

        record = await service.process_payment(payment_request)

        assert record.status == PaymentStatus.REJECTED
        assert await store.get(record.id) is None
        assert len(store) == 0

    async def test_bank_receives_generated_id_and_request(self, store, payment_request):
        bank = StubBankClient()
        service = PaymentService(bank, store)

        record = await service.process_payment(payment_request)

        assert bank.calls == [(record.id, payment_request)]

    async def test_each_payment_gets_a_new_id(self, store, payment_request):
        service = PaymentService(StubBankClient(), store)

        ids = {(await service.process_payment(payment_request)).id for _ in range(5)}

        assert len(ids) == 5
        assert len(store) == 5

    async def test_acquiring_error_propagates_and_nothing_is_stored(self, store, payment_request):
        bank = StubBankClient()
        bank.fail_with_null_body()
        service = PaymentService(bank, store)

        with pytest.raises(AcquiringBankError):
            await service.process_payment(payment_request)

        assert len(store) == 0
        with pytest.raises(PaymentNotFoundError):
            await service.get_payment(bank.last_payment_id)

    async def test_bank_is_called_once_on_failure(self, store, payment_request):
        """No retries: one failure is one bank call."""
        bank = StubBankClient(AcquiringBankError(uuid.uuid4(), "bank request failed"))
        service = PaymentService(bank, store)

        with pytest.raises(AcquiringBankError):
            await service.process_payment(payment_request)

        assert len(bank.calls) == 1

    async def test_record_is_immutable(self, store, payment_request):
        record = await PaymentService(StubBankClient(), store).process_payment(payment_request)
        with pytest.raises(Exception):
            record.status = PaymentStatus.DECLINED


class TestGetPayment:
    async def test_returns_stored_record(self, store, payment_request):
        service = PaymentService(StubBankClient(), store)
        record = await service.process_payment(payment_request)

        assert await service.get_payment(record.id) == record

    async def test_unknown_id_raises_not_found(self, store):
        service = PaymentService(StubBankClient(), store)
        payment_id = uuid.uuid4()

        with pytest.raises(PaymentNotFoundError) as exc_info:
            await service.get_payment(payment_id)
        assert exc_info.value.payment_id == payment_id


class TestPaymentRecord:
    def test_status_serializes_as_label(self):
        record = PaymentRecord(
            id=uuid.uuid4(),
            status=PaymentStatus.AUTHORIZED,
            card_number_last_four="0366",
            expiry_month=1,
            expiry_year=2030,
            currency="EUR",
            amount=1,
        )
        assert record.model_dump(mode="json")["status"] == "Authorized"
