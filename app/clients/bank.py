"""
Acquiring bank integration.

BankClient is the one capability the payment service needs from a bank:
"authorize this card payment". Production wires BankSimulatorClient (JSON over
HTTP via httpx); tests substitute a stub.

Result mapping:
  authorized + non-empty authorization code -> AUTHORIZED
  not authorized (code ignored)             -> DECLINED
  authorized without a code                 -> AcquiringBankError
  null body, bad body, non-2xx, network     -> AcquiringBankError

The card number and CVV never appear in logs or in the raised error: the
outbound request is logged through its masked repr, and errors carry only the
payment id.
"""

import uuid
from abc import ABC, abstractmethod

import httpx
import structlog
from pydantic import ValidationError

from app.exceptions import AcquiringBankError
from app.schemas.bank import BankAuthorizationRequest, BankAuthorizationResponse
from app.schemas.payment import PaymentRequest, PaymentStatus

logger = structlog.get_logger(__name__)


class BankClient(ABC):
    """Abstract acquiring bank."""

    @abstractmethod
    async def authorize(
        self,
        payment_id: uuid.UUID,
        request: PaymentRequest,
    ) -> PaymentStatus:
        """
        Ask the bank to authorize a validated payment.

        Returns:
            PaymentStatus.AUTHORIZED or PaymentStatus.DECLINED.

        Raises:
            AcquiringBankError: The bank could not be reached or did not give
                a trustworthy answer. Declines are NOT errors.
        """

    async def close(self) -> None:
        """Release transport resources. No-op unless overridden."""


class BankSimulatorClient(BankClient):
    """
    HTTP client for the acquiring bank simulator.

    Args:
        base_url: Simulator root, e.g. "http://localhost:8080".
        timeout_seconds: Per-request timeout; None waits indefinitely.
        http_client: Pre-built httpx client (tests pass one with a MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float | None = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

        logger.info(
            "bank_client_initialized",
            base_url=self.base_url,
            timeout_seconds=timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def authorize(
        self,
        payment_id: uuid.UUID,
        request: PaymentRequest,
    ) -> PaymentStatus:
        bank_request = BankAuthorizationRequest(
            card_number=request.card_number,
            expiry_date=request.expiry_date,
            cvv=request.cvv,
            currency=request.currency,
            amount=request.amount,
        )
        url = f"{self.base_url}/payments"

        logger.info(
            "bank_authorization_request",
            payment_id=str(payment_id),
            request=repr(bank_request),
            url=url,
        )

        try:
            response = await self.http_client.post(url, json=bank_request.model_dump())
            response.raise_for_status()
            body = response.json() if response.content else None
        except Exception as e:
            # Logged by type only: exception text from the transport may echo the body
            logger.error(
                "bank_request_failed",
                payment_id=str(payment_id),
                card_last_four=request.card_number_last_four,
                error_type=type(e).__name__,
            )
            raise AcquiringBankError(payment_id, "bank request failed") from e

        return self._to_status(payment_id, body)

    def _to_status(self, payment_id: uuid.UUID, body: object) -> PaymentStatus:
        if body is None:
            logger.warning("bank_returned_null_body", payment_id=str(payment_id))
            raise AcquiringBankError(payment_id, "bank returned null body")

        try:
            bank_response = BankAuthorizationResponse.model_validate(body)
        except ValidationError as e:
            logger.error("bank_returned_invalid_body", payment_id=str(payment_id))
            raise AcquiringBankError(payment_id, "bank returned invalid body") from e

        if not bank_response.authorized:
            logger.info("bank_declined_payment", payment_id=str(payment_id))
            return PaymentStatus.DECLINED

        if bank_response.authorization_code:
            logger.info(
                "bank_authorized_payment",
                payment_id=str(payment_id),
                authorization_code=bank_response.authorization_code,
            )
            return PaymentStatus.AUTHORIZED

        logger.warning("bank_authorized_without_code", payment_id=str(payment_id))
        raise AcquiringBankError(payment_id, "bank authorized without authorization code")
