"""Tests for form validators."""

import pytest

from app.utils.validators import (
    password_strength,
    validate_otp_code,
    validate_phone,
    validate_reset_password,
    validate_signup_password,
)


@pytest.mark.parametrize(
    "password,score,label",
    [
        ("", 0, "weak"),
        ("abcdef", 1, "weak"),
        ("abcdefghi", 2, "weak"),
        ("Abcdefghi", 3, "medium"),
        ("Abcdefgh1", 4, "medium"),
        ("Abcdefgh1!", 5, "strong"),
    ],
)
def test_password_strength(password, score, label):
    assert password_strength(password) == (score, label)


def test_signup_password_too_weak():
    assert "Password is too weak" in validate_signup_password("abcdef")


def test_signup_password_accepted():
    assert validate_signup_password("Secret1!") == []


def test_signup_password_too_short():
    errors = validate_signup_password("Ab1!")

    assert any("at least 6" in error for error in errors)


def test_reset_password_rules():
    assert validate_reset_password("short", "short") == "Password must be at least 6 characters"
    assert validate_reset_password("long-enough", "different") == "Passwords do not match"
    assert validate_reset_password("long-enough", "long-enough") is None


def test_phone():
    assert validate_phone("+91 98765 43210")
    assert not validate_phone("12345")


def test_otp_code_format():
    assert validate_otp_code("012345")
    assert not validate_otp_code("12345")
    assert not validate_otp_code("12a456")
