"""Supported-currency check."""

from typing import Iterable

import pycountry
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_SUPPORTED_CURRENCIES = ("GBP", "USD", "EUR")


def is_iso_currency(code: str) -> bool:
    """True when `code` (already upper-cased) is an ISO 4217 alphabetic code."""
    if len(code) != 3 or not (code.isascii() and code.isalpha()):
        return False
    return pycountry.currencies.get(alpha_3=code) is not None


class CurrencyValidator:
    """
    Accepts ISO 4217 codes from a fixed allow-list.

    Input is compared case-insensitively ("usd" passes when USD is supported).
    None, blank, malformed codes, codes ISO 4217 does not know (even when
    allow-listed), and real codes outside the allow-list (JPY, CAD, ...) all fail.
    """

    def __init__(self, supported_currencies: Iterable[str] = DEFAULT_SUPPORTED_CURRENCIES):
        self.supported_currencies = tuple(code.upper() for code in supported_currencies)

    def is_valid(self, currency: str | None) -> bool:
        if currency is None or not currency.strip():
            return False
        code = currency.upper()
        if not is_iso_currency(code):
            logger.warning("currency_not_recognized", currency=currency)
            return False
        supported = code in self.supported_currencies
        if not supported:
            logger.warning("currency_not_supported", currency=currency)
        return supported
