"""
Tests for card-data masking.

These tests verify:
  - Card numbers render as "**** **** **** <last4>" whatever their formatting
  - Short or empty numbers never reveal digits
  - CVVs are never echoed
  - Bank requests and payment requests mask themselves in repr/str
"""

import pytest

from app.schemas.bank import BankAuthorizationRequest
from app.schemas.payment import PaymentRequest
from app.security import card_number_last_four, mask_card_number, mask_cvv


class TestMaskCardNumber:
    def test_masks_all_but_last_four(self):
        assert mask_card_number("4532015112830366") == "**** **** **** 0366"

    def test_strips_formatting_before_masking(self):
        assert mask_card_number("4532 0151-1283 0366") == "**** **** **** 0366"

    @pytest.mark.parametrize("value", ["1234567", "12-34-56", "abc1234"])
    def test_fewer_than_eight_digits_fully_masked(self, value):
        assert mask_card_number(value) == "****"

    def test_exactly_eight_digits_shows_last_four(self):
        assert mask_card_number("12345678") == "**** **** **** 5678"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_number(self, value):
        assert mask_card_number(value) == "null"


class TestMaskCvv:
    @pytest.mark.parametrize("value", ["123", "9876", None, ""])
    def test_always_fixed_mask(self, value):
        assert mask_cvv(value) == "***"


class TestLastFour:
    def test_last_four(self):
        assert card_number_last_four("4532015112830366") == "0366"

    @pytest.mark.parametrize("value", [None, "", "123"])
    def test_short_or_missing(self, value):
        assert card_number_last_four(value) == ""


class TestMaskedRepresentations:
    def test_bank_request_repr_is_masked(self):
        request = BankAuthorizationRequest(
            card_number="4532015112830366",
            expiry_date="12/2030",
            cvv="123",
            currency="USD",
            amount=100,
        )
        for rendered in (repr(request), str(request), f"{request}"):
            assert "4532015112830366" not in rendered
            assert "cvv='***'" in rendered
            assert "**** **** **** 0366" in rendered
            assert "12/2030" in rendered

    def test_bank_request_serializes_full_values(self):
        """The wire body still carries the real card data for the bank."""
        request = BankAuthorizationRequest(
            card_number="4532015112830366",
            expiry_date="12/2030",
            cvv="123",
            currency="USD",
            amount=100,
        )
        assert request.model_dump() == {
            "card_number": "4532015112830366",
            "expiry_date": "12/2030",
            "cvv": "123",
            "currency": "USD",
            "amount": 100,
        }

    def test_payment_request_repr_is_masked(self):
        request = PaymentRequest(
            card_number="4532015112830366",
            expiry_month=12,
            expiry_year=2030,
            currency="USD",
            amount=100,
            cvv="4821",
        )
        rendered = repr(request)
        assert "4532015112830366" not in rendered
        assert "4821" not in rendered
        assert "**** **** **** 0366" in rendered
        assert "4532015112830366" not in str(request)
