"""
utils/validation_utils.py

Purpose: Input helpers for the verification flow

- Phone number normalization (store key)
- One-time code generation
- Matching a submitted SMS payload against the expected code
"""

import re
import secrets
from typing import Optional


# Separators people and keyboards put inside phone numbers
PHONE_SEPARATORS = re.compile(r"[\s\-\.\(\)]")


def normalize_phone(phone: str) -> str:
    """
    Normalizes a phone number into the key used by the verification store.

    Only formatting characters are removed; the number is not validated.
    "+1 (555) 123-4567" and "+15551234567" map to the same key.

    Args:
        phone: Phone number as submitted by the client

    Returns:
        Phone number without separators
    """
    if phone is None:
        return ""
    return PHONE_SEPARATORS.sub("", phone.strip())


def generate_numeric_code(length: int = 6) -> str:
    """
    Generates a fixed-width numeric one-time code.
    Uses the secrets module so codes are not predictable.
    """
    if length < 1:
        raise ValueError("Code length must be positive")
    return "".join(secrets.choice("0123456789") for _ in range(length))


def message_matches_code(code: str, message: Optional[str]) -> bool:
    """
    Checks a submitted value against the expected code.

    Accepts either the bare code or a longer message (e.g. the full SMS body
    forwarded by the app) that contains it.

    Args:
        code: Expected one-time code
        message: Submitted value

    Returns:
        True on exact or substring match
    """
    if not code or message is None:
        return False
    return message == code or code in message
