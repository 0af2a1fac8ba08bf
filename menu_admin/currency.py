"""Price sanitising and display helpers."""

from __future__ import annotations

import re

from menu_admin.errors import ValidationError

_NON_DIGITS = re.compile(r"[^0-9]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def strip_digits(value: object) -> str:
    """Drop every character that is not a digit."""
    return _NON_DIGITS.sub("", str(value))


def format_currency(value: object) -> str:
    """Insert a `.` separator every three digits, e.g. `18000` -> `18.000`."""
    digits = strip_digits(value)
    if not digits:
        return ""
    return _THOUSANDS.sub(".", digits)


def parse_price(value: object) -> int:
    """Parse free-text price input into an integer amount."""
    digits = strip_digits(value)
    if not digits:
        raise ValidationError("price", "Invalid input: price must be a whole number")
    return int(digits)


def display_price(price: int) -> str:
    return f"Rp{format_currency(price) or '0'},00"
