"""
Payments router — card payment processing and retrieval.

Endpoints:
  POST /v1/payments       — Validate, authorize with the bank, and record a payment
  GET  /v1/payments/{id}  — Retrieve a previously processed payment

Validation happens here, before the service is called, so a rejected request
never reaches the bank. Responses expose the last four card digits only.
"""

import uuid

from fastapi import APIRouter, Depends

from app.dependencies import get_payment_service, get_request_validator
from app.exceptions import PaymentValidationError
from app.schemas.payment import ErrorResponse, PaymentRecord, PaymentRequest
from app.services.payment_service import PaymentService
from app.validation.payment_request import PaymentRequestValidator

router = APIRouter()


@router.post(
    "",
    response_model=PaymentRecord,
    summary="Process a card payment",
    responses={
        400: {"model": ErrorResponse, "description": "Rejected or malformed request"},
        502: {"model": ErrorResponse, "description": "Acquiring bank failure"},
    },
)
async def create_payment(
    payment: PaymentRequest,
    validator: PaymentRequestValidator = Depends(get_request_validator),
    service: PaymentService = Depends(get_payment_service),
):
    """
    Process a card payment.

    - Every validation rule is checked; all violations are reported together
    - Valid requests are sent to the acquiring bank for authorization
    - Authorized and Declined payments are stored and can be fetched by id
    """
    errors = validator.validate(payment)
    if errors:
        raise PaymentValidationError(errors)
    return await service.process_payment(payment)


@router.get(
    "/{payment_id}",
    response_model=PaymentRecord,
    summary="Get a payment",
    responses={404: {"model": ErrorResponse, "description": "Payment not found"}},
)
async def get_payment(
    payment_id: uuid.UUID,
    service: PaymentService = Depends(get_payment_service),
):
    """Return a previously processed payment (masked card details only)."""
    return await service.get_payment(payment_id)
