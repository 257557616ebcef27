"""
Pydantic schemas for Payment endpoints.

PaymentRequest is deliberately permissive: every field is optional so that
missing values reach the request validator and come back as "must not be
empty" diagnostics instead of generic parse errors. Values of the wrong JSON
type (a string amount, an object for the card number) are still rejected by
pydantic as malformed input, and so are integers outside the signed 32-bit
range the bank and the payments table use.

Card numbers and CVVs are NEVER returned in API responses. The stored record
keeps only the last four digits.
"""

import enum
import uuid
from typing import Annotated

from pydantic import BaseModel, Field

from app.security import card_number_last_four, mask_card_number, mask_cvv


# Numbers outside the signed 32-bit range are malformed input, not rule violations
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]


class PaymentStatus(str, enum.Enum):
    """Terminal outcome of a payment."""
    AUTHORIZED = "Authorized"  # bank approved, with an authorization code
    DECLINED = "Declined"      # bank refused
    REJECTED = "Rejected"      # refused locally, never sent to or adjudicated by the bank


class PaymentRequest(BaseModel):
    """Request body for POST /v1/payments."""
    card_number: str | None = None
    expiry_month: Int32 | None = None
    expiry_year: Int32 | None = None
    currency: str | None = None
    amount: Int32 | None = None
    cvv: str | None = None

    @property
    def expiry_date(self) -> str:
        return f"{self.expiry_month}/{self.expiry_year}"

    @property
    def card_number_last_four(self) -> str:
        return card_number_last_four(self.card_number)

    def __repr_args__(self):
        for name, value in super().__repr_args__():
            if name == "card_number":
                value = mask_card_number(value)
            elif name == "cvv":
                value = mask_cvv(value)
            yield name, value


class PaymentRecord(BaseModel):
    """A processed payment. Immutable once built."""
    id: uuid.UUID
    status: PaymentStatus
    card_number_last_four: str
    expiry_month: int
    expiry_year: int
    currency: str
    amount: int

    model_config = {"from_attributes": True, "frozen": True}


class ErrorResponse(BaseModel):
    """Error body returned by every exception handler."""
    message: str
    status: PaymentStatus | None = None
