"""
Payment model — one row per bank-adjudicated payment.

Rows are written once, by the payment service, and never updated or deleted.
Only AUTHORIZED and DECLINED payments are stored; locally rejected requests
never reach this table.

Only the last four digits of the card are stored. The full card number and
CVV are forwarded to the bank and then discarded.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Payment(Base):
    __tablename__ = "payments"

    # Generated by the payment service, not by the database
    id: Mapped[uuid.UUID] = mapped_column(primary_key=True)

    status: Mapped[str] = mapped_column(String(16), nullable=False)

    # Last four digits in plaintext for display ("ending in 0366")
    card_number_last_four: Mapped[str] = mapped_column(
        String(4),
        nullable=False,
    )

    expiry_month: Mapped[int] = mapped_column(Integer, nullable=False)
    expiry_year: Mapped[int] = mapped_column(Integer, nullable=False)

    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    # Minor units; bounded by the 32-bit limit enforced at validation
    amount: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
