"""
Payment request validation.

The validator runs an ordered list of independent field checks over a
PaymentRequest. Each check contributes zero or more "field: message"
diagnostics, so one response lists every broken rule rather than the first.

Ordering matters:
  1. Field checks (presence, length, digits, ranges, Luhn, year, currency)
  2. The composite expiry-date check, only if step 1 found nothing

The composite check treats missing month/year as valid, so it is only safe
after the presence checks have run.
"""

import re
from typing import Callable, Iterable, Iterator

from app.schemas.payment import PaymentRequest
from app.validation.checksum import passes_luhn_check
from app.validation.currency import DEFAULT_SUPPORTED_CURRENCIES, CurrencyValidator
from app.validation.expiry import Clock, is_current_or_future_year, is_not_expired, utc_today

# Amounts are 32-bit on the bank side; the top value itself is reserved
MAX_AMOUNT = 2_147_483_647

_DIGITS_ONLY = re.compile(r"[0-9]+")

FieldCheck = Callable[[PaymentRequest], Iterator[str]]


class PaymentRequestValidator:
    """
    Validates payment requests before any bank call is attempted.

    Args:
        supported_currencies: Allow-list of ISO currency codes.
        today: Clock used by the expiry checks (defaults to today's UTC date).
    """

    def __init__(
        self,
        supported_currencies: Iterable[str] = DEFAULT_SUPPORTED_CURRENCIES,
        today: Clock = utc_today,
    ):
        self.currency_validator = CurrencyValidator(supported_currencies)
        self.today = today
        self._field_checks: list[tuple[str, FieldCheck]] = [
            ("card_number", self._check_card_number),
            ("expiry_month", self._check_expiry_month),
            ("expiry_year", self._check_expiry_year),
            ("currency", self._check_currency),
            ("amount", self._check_amount),
            ("cvv", self._check_cvv),
        ]

    def validate(self, request: PaymentRequest) -> list[str]:
        """
        Return every violation for the request, in check order.

        An empty list means the request may be processed.
        """
        errors = [
            f"{field}: {message}"
            for field, check in self._field_checks
            for message in check(request)
        ]
        if errors:
            return errors

        if not is_not_expired(request.expiry_month, request.expiry_year, self.today):
            return ["Expiry date is not valid"]
        return []

    # ------------------------------------------------------------------
    # Field checks
    # ------------------------------------------------------------------

    def _check_card_number(self, request: PaymentRequest) -> Iterator[str]:
        card_number = request.card_number
        if card_number is None:
            yield "Card number must not be empty"
            return
        if not 14 <= len(card_number) <= 19:
            yield "Card number must be between 14 and 19 characters long"
        if not _DIGITS_ONLY.fullmatch(card_number):
            yield "Card number must be 14-19 numeric characters long"
        if not passes_luhn_check(card_number):
            yield "Invalid card number, failed Luhn check"

    def _check_expiry_month(self, request: PaymentRequest) -> Iterator[str]:
        if request.expiry_month is None:
            yield "Expiry month must not be empty"
        elif not 1 <= request.expiry_month <= 12:
            yield "Invalid value of the expiry month, value should be in a range 1-12"

    def _check_expiry_year(self, request: PaymentRequest) -> Iterator[str]:
        if request.expiry_year is None:
            yield "Expiry year must not be empty"
        elif not is_current_or_future_year(request.expiry_year, self.today):
            yield "Expiry year must be the current or a future year"

    def _check_currency(self, request: PaymentRequest) -> Iterator[str]:
        currency = request.currency
        if currency is None:
            yield "Currency must not be empty"
            return
        if len(currency) != 3:
            yield "Currency must be exactly 3 characters long"
        if not self.currency_validator.is_valid(currency):
            supported = ", ".join(self.currency_validator.supported_currencies)
            yield f"Currency is not supported, supported currencies: {supported}"

    def _check_amount(self, request: PaymentRequest) -> Iterator[str]:
        amount = request.amount
        if amount is None:
            yield "Amount must not be empty"
        elif amount < 1:
            yield "Invalid value of the amount, value must be more than 0"
        elif amount >= MAX_AMOUNT:
            yield f"Invalid value of the amount, value must be less than {MAX_AMOUNT}"

    def _check_cvv(self, request: PaymentRequest) -> Iterator[str]:
        cvv = request.cvv
        if cvv is None:
            yield "CVV must not be empty"
            return
        if not 3 <= len(cvv) <= 4:
            yield "CVV must be 3 or 4 characters long"
        if not _DIGITS_ONLY.fullmatch(cvv):
            yield "CVV must only contain numeric characters"
