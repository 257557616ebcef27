"""
Card-data masking utilities.

Full card numbers (PANs) and CVVs must never appear in logs, error messages,
or API responses. Anything that needs to render payment data for humans goes
through these helpers:

  - mask_card_number: "**** **** **** 0366" (or "****" for short input)
  - mask_cvv:         always "***", whatever the input
  - card_number_last_four: the four digits kept on the stored record

Masking is irreversible: the helpers drop everything but the last four
digits, so their output is safe to log at any level.
"""

import re

_NON_DIGITS = re.compile(r"\D+")

# Fewer digits than this and even the last four would reveal too much
_MIN_MASKABLE_DIGITS = 8


def mask_card_number(card_number: str | None) -> str:
    """
    Mask a card number for display.

    Non-digit characters are stripped first, so "4532 0151 1283 0366" and
    "4532015112830366" mask identically.

    Returns:
        "null" when no number was supplied, "****" when fewer than 8 digits
        remain, otherwise "**** **** **** <last4>".
    """
    if card_number is None or not card_number.strip():
        return "null"
    digits = _NON_DIGITS.sub("", card_number)
    if len(digits) < _MIN_MASKABLE_DIGITS:
        return "****"
    return f"**** **** **** {digits[-4:]}"


def mask_cvv(cvv: str | None) -> str:
    """CVVs are never echoed, not even partially."""
    return "***"


def card_number_last_four(card_number: str | None) -> str:
    """Last four characters of the card number, or "" if there are fewer."""
    if card_number is None or len(card_number) < 4:
        return ""
    return card_number[-4:]
