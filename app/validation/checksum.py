"""
Luhn checksum for card numbers.

See https://en.wikipedia.org/wiki/Luhn_algorithm. Works for any length of
digit string, so 14-digit Diners Club and 15-digit Amex numbers validate the
same way as 16-digit Visa numbers.
"""

import structlog

from app.security import card_number_last_four

logger = structlog.get_logger(__name__)


def passes_luhn_check(card_number: str | None) -> bool:
    """
    Return True if the digit string has a valid Luhn checksum.

    Never raises: None, "" and anything containing a non-digit are simply
    invalid.
    """
    if not card_number or not (card_number.isascii() and card_number.isdigit()):
        return False

    total = 0
    for position, char in enumerate(reversed(card_number)):
        digit = int(char)
        # Every second digit from the right is doubled
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    valid = total % 10 == 0
    if not valid:
        logger.warning(
            "card_number_failed_luhn_check",
            card_last_four=card_number_last_four(card_number),
        )
    return valid
