"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Args:
        phone: Phone number string in various formats

    Returns:
        Digits only, keeping a leading + when present

    Raises:
        ValueError: If phone number has fewer than 8 or more than 15 digits
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)
    if not 8 <= len(digits) <= 15:
        raise ValueError("Phone number must have between 8 and 15 digits")

    return f"+{digits}" if phone.strip().startswith("+") else digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


# ============================================================================
# SIMULATED PAYMENT CARD CHECKS
# ============================================================================


def validate_cardholder_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise ValueError("Cardholder name is required.")
    if re.search(r"\d", name):
        raise ValueError("Name should not contain numbers.")
    return name.strip()


def validate_card_number(number: Optional[str]) -> str:
    """Return the 16 card digits with separators removed"""
    digits = re.sub(r"\D", "", number or "")
    if len(digits) != 16:
        raise ValueError("Card number must be 16 digits.")
    return digits


def validate_card_cvc(cvc: Optional[str]) -> str:
    digits = re.sub(r"\D", "", cvc or "")
    if len(digits) != 3:
        raise ValueError("CVC must be 3 digits.")
    return digits


def validate_card_expiry(expiry: Optional[str], today: Optional[date] = None) -> str:
    """
    Validate an MM/YY expiry; a card is valid through its expiry month.

    Raises:
        ValueError: On bad format, bad month or an expired card
    """
    if not expiry or not re.match(r"^\d{2}/\d{2}$", expiry):
        raise ValueError("Invalid format. Use MM/YY.")

    month, year = (int(part) for part in expiry.split("/"))
    today = today or date.today()
    current_year = today.year % 100

    if month < 1 or month > 12:
        raise ValueError("Invalid month.")
    if year < current_year or (year == current_year and month < today.month):
        raise ValueError("Card has expired.")

    return expiry
