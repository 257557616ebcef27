"""
Custom exception classes and FastAPI exception handlers.

The service layer raises domain errors without importing HTTP concepts; the
handlers registered here translate them into JSON responses. Every error body
carries a "message", and validation rejections also carry a "status" label.

Exception hierarchy:
    PaymentGatewayError (base)
    ├── PaymentValidationError  — request failed one or more validation rules
    ├── PaymentNotFoundError    — no payment stored under the requested id
    └── AcquiringBankError      — the bank call failed or returned no proof

No handler ever echoes card numbers or CVVs: domain errors are built from
payment ids and rule messages only.
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.payment import PaymentStatus

logger = structlog.get_logger(__name__)

ACQUIRING_ERROR_MESSAGE = (
    "Error processing payment. Acquiring bank integration error. Try again later."
)


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class PaymentGatewayError(Exception):
    """Base exception for all Payment Gateway domain errors."""

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class PaymentValidationError(PaymentGatewayError):
    """
    Raised when a payment request breaks one or more validation rules.

    Attributes:
        errors: Ordered "field: message" diagnostics, one per broken rule.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class PaymentNotFoundError(PaymentGatewayError):
    """Raised when a requested payment does not exist."""

    def __init__(self, payment_id: uuid.UUID):
        self.payment_id = payment_id
        super().__init__(f"Payment {payment_id} not found")


class AcquiringBankError(PaymentGatewayError):
    """
    Raised when the acquiring bank cannot adjudicate a payment.

    Covers transport failures, empty bodies and authorizations without an
    authorization code. The message names the payment id and never the card.
    """

    def __init__(self, payment_id: uuid.UUID, reason: str):
        self.payment_id = payment_id
        self.reason = reason
        super().__init__(f"Acquiring bank error for payment {payment_id}: {reason}")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register custom exception handlers with the FastAPI application.

    This is called once during app startup in main.py.
    """

    @app.exception_handler(PaymentValidationError)
    async def payment_validation_handler(
        request: Request, exc: PaymentValidationError
    ) -> JSONResponse:
        logger.warning("payment_rejected", violations=exc.errors)
        return JSONResponse(
            status_code=400,
            content={"status": PaymentStatus.REJECTED.value, "message": exc.detail},
        )

    @app.exception_handler(PaymentNotFoundError)
    async def payment_not_found_handler(
        request: Request, exc: PaymentNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"message": "Payment not found"},
        )

    @app.exception_handler(AcquiringBankError)
    async def acquiring_bank_handler(
        request: Request, exc: AcquiringBankError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=502,  # Bad Gateway: the upstream bank failed, not the caller
            content={"message": ACQUIRING_ERROR_MESSAGE},
        )

    @app.exception_handler(RequestValidationError)
    async def malformed_request_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.warning(
            "malformed_request",
            path=request.url.path,
            error_types=[error.get("type") for error in errors],
        )
        if any(tuple(error.get("loc", ()))[:1] == ("path",) for error in errors):
            message = "Invalid argument format"
        else:
            message = "Malformed request: " + "; ".join(
                _describe_request_error(error) for error in errors
            )
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error("unexpected_error", path=request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"message": str(exc)})


def _describe_request_error(error: dict) -> str:
    """Render a pydantic error without its input value (it may hold card data)."""
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
