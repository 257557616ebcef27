#!/usr/bin/env python3
"""
Acquiring bank simulator — a stand-in bank for local demos.

!! NOT FOR PRODUCTION !!
Answers POST /payments the way the gateway's bank client expects. The
outcome is chosen by the last digit of the card number:

    ┌────────────────────┬──────────────────────────────────────────┐
    │ Last digit         │ Response                                 │
    ├────────────────────┼──────────────────────────────────────────┤
    │ 1, 3, 5, 7, 9      │ 200 authorized, with authorization code  │
    │ 2, 4, 6, 8         │ 200 declined                             │
    │ 0                  │ 503 (gateway reports an acquiring error) │
    └────────────────────┴──────────────────────────────────────────┘

Usage:
    uvicorn demo.bank_simulator:app --port 8080

Then start the gateway with BANK_SIMULATOR_URL=http://localhost:8080.
"""

import uuid

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.schemas.bank import BankAuthorizationRequest, BankAuthorizationResponse

app = FastAPI(title="Acquiring Bank Simulator")


@app.post("/payments", response_model=BankAuthorizationResponse)
async def authorize(payment: BankAuthorizationRequest):
    last_digit = int(payment.card_number[-1])

    if last_digit == 0:
        return JSONResponse(
            status_code=503,
            content={"errorMessage": "Bank temporarily unavailable"},
        )
    if last_digit % 2 == 1:
        return BankAuthorizationResponse(
            authorized=True,
            authorization_code=str(uuid.uuid4()),
        )
    return BankAuthorizationResponse(authorized=False, authorization_code="")
