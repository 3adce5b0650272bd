import pytest

from app.utils.validators import normalize_phone, slugify, validate_phone


@pytest.mark.parametrize(
    "raw,expected",
    [
        (" 017-1234-5678 ", "01712345678"),
        ("+880 1712 345678", "+8801712345678"),
        ("(555) 010-9999", "5550109999"),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


@pytest.mark.parametrize(
    "phone",
    ["01712345678", "+8801712345678", "8801712345678", "+44 20 7946 0958", "12345678"],
)
def test_validate_phone_accepts(phone):
    assert validate_phone(phone)


@pytest.mark.parametrize("phone", ["1234567", "1234567890123456", "abc", ""])
def test_validate_phone_rejects(phone):
    assert not validate_phone(phone)


def test_slugify():
    assert slugify("  Green Field Turf (Dhanmondi) ") == "green-field-turf-dhanmondi"
    assert slugify("***") == ""
