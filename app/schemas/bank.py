"""
Wire schemas for the acquiring bank simulator.

These shapes exist only for the duration of one authorization call and are
never persisted. The request's repr/str masks the card number and CVV so the
object can be logged as a whole.
"""

from pydantic import BaseModel

from app.security import mask_card_number, mask_cvv


class BankAuthorizationRequest(BaseModel):
    """Body of POST <bank>/payments."""
    card_number: str
    expiry_date: str  # "<month>/<year>"
    cvv: str
    currency: str
    amount: int

    def __repr__(self) -> str:
        return (
            "BankAuthorizationRequest("
            f"card_number={mask_card_number(self.card_number)!r}, "
            f"expiry_date={self.expiry_date!r}, "
            f"cvv={mask_cvv(self.cvv)!r}, "
            f"currency={self.currency!r}, "
            f"amount={self.amount})"
        )

    __str__ = __repr__


class BankAuthorizationResponse(BaseModel):
    """Bank verdict. An authorization without a code is not trusted."""
    authorized: bool
    authorization_code: str | None = None
