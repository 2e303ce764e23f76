"""Validators."""

import re
from typing import List, Optional, Tuple

MIN_PASSWORD_LENGTH = 6
# Signup is refused below this strength score
MIN_SIGNUP_SCORE = 2


def validate_phone(phone: str) -> bool:
    """Validate phone number."""
    # Simple validation for 10+ digits
    pattern = r'^\+?[\d\s-]{10,}$'
    return bool(re.match(pattern, phone or ""))


def password_strength(password: str) -> Tuple[int, str]:
    """
    Score a password from 0 to 5 and label it.

    One point each for: longer than 5, longer than 8, an uppercase letter,
    a digit, a symbol. 0-2 is "weak", 3-4 "medium", 5 "strong".
    """
    password = password or ""
    score = 0
    if len(password) > 5:
        score += 1
    if len(password) > 8:
        score += 1
    if re.search(r'[A-Z]', password):
        score += 1
    if re.search(r'[0-9]', password):
        score += 1
    if re.search(r'[^A-Za-z0-9]', password):
        score += 1

    if score <= 2:
        label = "weak"
    elif score <= 4:
        label = "medium"
    else:
        label = "strong"
    return score, label


def validate_signup_password(password: str) -> List[str]:
    """Errors for the signup form; empty when the password is acceptable."""
    errors = []
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    score, _ = password_strength(password)
    if score < MIN_SIGNUP_SCORE:
        errors.append("Password is too weak")
    return errors


def validate_reset_password(new_password: str, confirm_password: str) -> Optional[str]:
    """Return the first problem with a password reset form, or None."""
    if len(new_password or "") < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if new_password != confirm_password:
        return "Passwords do not match"
    return None


def validate_otp_code(code: str, length: int = 6) -> bool:
    """A code is exactly ``length`` digits."""
    return bool(code) and len(code) == length and code.isdigit()
