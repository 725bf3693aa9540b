"""Tests for shared validators and catalog text cleaning."""
from datetime import date

import pytest

from barbershop.models import AppointmentStatus
from barbershop.shared.validators import (
    validate_card_cvc,
    validate_card_expiry,
    validate_card_number,
    validate_cardholder_name,
    validate_email,
    validate_phone,
)
from barbershop.utils.sanitization import clean_text


class TestContactValidators:
    def test_phone_is_normalized(self):
        assert validate_phone("(555) 123-4567") == "5551234567"
        assert validate_phone("+44 20 7946 0958") == "+442079460958"

    @pytest.mark.parametrize("phone", ["123", "1234567890123456"])
    def test_phone_length(self, phone):
        with pytest.raises(ValueError):
            validate_phone(phone)

    def test_email_is_lowercased(self):
        assert validate_email("  Jane@Example.COM ") == "jane@example.com"

    @pytest.mark.parametrize("email", ["jane", "jane@", "jane@example", "@example.com"])
    def test_bad_email(self, email):
        with pytest.raises(ValueError):
            validate_email(email)


class TestCardValidators:
    def test_card_number_strips_separators(self):
        assert validate_card_number("4242-4242-4242-4242") == "4242424242424242"

    def test_cardholder_name(self):
        assert validate_cardholder_name("  Jane Client ") == "Jane Client"
        with pytest.raises(ValueError, match="numbers"):
            validate_cardholder_name("Agent 47")

    def test_cvc(self):
        assert validate_card_cvc("007") == "007"
        with pytest.raises(ValueError):
            validate_card_cvc("1234")

    def test_expiry_month_is_still_valid(self):
        assert validate_card_expiry("06/25", today=date(2025, 6, 30)) == "06/25"

    def test_expiry_previous_month_is_expired(self):
        with pytest.raises(ValueError, match="expired"):
            validate_card_expiry("05/25", today=date(2025, 6, 1))

    @pytest.mark.parametrize("expiry", ["6/25", "06-25", "", None])
    def test_expiry_format(self, expiry):
        with pytest.raises(ValueError, match="MM/YY"):
            validate_card_expiry(expiry, today=date(2025, 6, 1))


class TestCleanText:
    def test_text_is_stored_raw(self):
        assert clean_text("  Beard & Trim <b>\x07 ") == "Beard & Trim <b>"

    def test_cleaning_is_idempotent(self):
        once = clean_text("Beard &amp; Trim")

        assert once == "Beard & Trim"
        assert clean_text(once) == once

    def test_too_long(self):
        with pytest.raises(ValueError):
            clean_text("x" * 11, max_length=10)

    def test_empty(self):
        assert clean_text(None) == ""


class TestStatusParsing:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("scheduled", AppointmentStatus.SCHEDULED),
            ("Completed", AppointmentStatus.COMPLETED),
            ("canceled", AppointmentStatus.CANCELED),
            ("cancelled", AppointmentStatus.CANCELED),
        ],
    )
    def test_parse(self, value, expected):
        assert AppointmentStatus.parse(value) is expected

    def test_unknown_status(self):
        with pytest.raises(ValueError):
            AppointmentStatus.parse("pending")
