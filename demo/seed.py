#!/usr/bin/env python3
"""
Demo seed script — sends sample payments through a running gateway.

!! NOT FOR PRODUCTION !!
Posts a handful of payments covering every outcome (authorized, declined,
rejected, bank failure), then reads each stored payment back by id.

Usage:
    # With the bank simulator on :8080 and the gateway on :8000:
    python demo/seed.py

    # Custom gateway URL:
    python demo/seed.py --base-url http://localhost:9000
"""

import argparse
import asyncio
from datetime import datetime, timezone

import httpx

BASE_URL = "http://localhost:8000"

NEXT_YEAR = datetime.now(timezone.utc).year + 1

# Outcomes assume demo/bank_simulator.py is the acquiring bank
SAMPLE_PAYMENTS = [
    (
        "authorized (Amex, odd last digit)",
        {"card_number": "371449635398431", "expiry_month": 4, "expiry_year": NEXT_YEAR,
         "currency": "GBP", "amount": 1050, "cvv": "1234"},
    ),
    (
        "declined (Visa, even last digit)",
        {"card_number": "4532015112830366", "expiry_month": 12, "expiry_year": NEXT_YEAR,
         "currency": "USD", "amount": 100, "cvv": "123"},
    ),
    (
        "declined (Diners Club, 14 digits)",
        {"card_number": "30569309025904", "expiry_month": 1, "expiry_year": NEXT_YEAR,
         "currency": "eur", "amount": 99_99, "cvv": "321"},
    ),
    (
        "bank failure (last digit 0)",
        {"card_number": "4000000000000010", "expiry_month": 6, "expiry_year": NEXT_YEAR,
         "currency": "USD", "amount": 500, "cvv": "555"},
    ),
    (
        "rejected (bad card, past year, unsupported currency)",
        {"card_number": "invalid-card", "expiry_month": 13, "expiry_year": 2020,
         "currency": "JPY", "amount": 0, "cvv": "12"},
    ),
]


def log(msg: str) -> None:
    print(f"  {msg}")


async def seed(base_url: str) -> None:
    async with httpx.AsyncClient(base_url=base_url, timeout=30) as client:
        health = await client.get("/health")
        health.raise_for_status()
        print(f"Gateway {health.json()['version']} at {base_url}\n")

        stored_ids = []
        for label, payment in SAMPLE_PAYMENTS:
            response = await client.post("/v1/payments", json=payment)
            body = response.json()
            print(f"{label}: HTTP {response.status_code}")
            if response.status_code == 200:
                log(f"id={body['id']} status={body['status']} "
                    f"card=****{body['card_number_last_four']}")
                stored_ids.append(body["id"])
            else:
                for line in body["message"].split("\n"):
                    log(line)

        print("\nReading stored payments back:")
        for payment_id in stored_ids:
            response = await client.get(f"/v1/payments/{payment_id}")
            log(f"{payment_id}: HTTP {response.status_code} {response.json()['status']}")


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Send sample payments through the payment gateway",
    )
    parser.add_argument(
        "--base-url",
        default=BASE_URL,
        help=f"Gateway base URL (default: {BASE_URL})",
    )
    args = parser.parse_args()
    await seed(args.base_url)


if __name__ == "__main__":
    asyncio.run(main())
