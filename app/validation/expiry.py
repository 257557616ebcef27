"""
Card expiry checks.

Both checks compare against "today" as observed at validation time. The clock
is a parameter so callers (and tests) can pin it.
"""

from datetime import date, datetime, timezone
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)

Clock = Callable[[], date]


def utc_today() -> date:
    """Default clock: the current UTC calendar date."""
    return datetime.now(timezone.utc).date()


def is_current_or_future_year(expiry_year: int | None, today: Clock = utc_today) -> bool:
    """The expiry year must not be before the current calendar year."""
    if expiry_year is None:
        return False
    valid = expiry_year >= today().year
    if not valid:
        logger.warning("expiry_year_in_past", expiry_year=expiry_year)
    return valid


def is_not_expired(
    expiry_month: int | None,
    expiry_year: int | None,
    today: Clock = utc_today,
) -> bool:
    """
    True if (month, year) is the current month or later.

    A missing month or year passes: this composite check only runs after the
    per-field checks have already reported missing values, and must stay
    ordered after them.
    """
    if expiry_month is None or expiry_year is None:
        return True

    now = today()
    if expiry_year > now.year:
        return True
    valid = expiry_year == now.year and expiry_month >= now.month
    if not valid:
        logger.warning(
            "expiry_date_in_past",
            expiry_month=expiry_month,
            expiry_year=expiry_year,
        )
    return valid
