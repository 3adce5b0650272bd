"""Custom validation utilities."""

import re

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

_BD_MOBILE_INTL = re.compile(r"^\+?8801\d{9}$")
_BD_MOBILE_LOCAL = re.compile(r"^01\d{9}$")


def normalize_phone(phone: str) -> str:
    """Strip everything except digits and ``+``.

    Args:
        phone: Phone number in any format

    Returns:
        str: Phone number like '+8801712345678' or '01712345678'
    """
    return re.sub(r"[^\d+]", "", phone.strip())


def validate_phone(phone: str) -> bool:
    """Validate a guest phone number.

    Accepted formats:
    - 01XXXXXXXXX (Bangladesh local mobile)
    - +8801XXXXXXXXX / 8801XXXXXXXXX (Bangladesh international)
    - any other number with 8 to 15 digits

    Args:
        phone: Phone number to validate

    Returns:
        bool: True if the number is acceptable
    """
    cleaned = normalize_phone(phone)
    if _BD_MOBILE_INTL.match(cleaned) or _BD_MOBILE_LOCAL.match(cleaned):
        return True

    digits = re.sub(r"\D", "", cleaned)
    return 8 <= len(digits) <= 15


def slugify(value: str) -> str:
    """Lower-case, hyphen-separated slug from free text."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower())
    return slug.strip("-")
