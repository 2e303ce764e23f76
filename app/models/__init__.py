"""Document models and collection names."""

from app.models.certificate import CERTIFICATES_COLLECTION, DEMO_CERTIFICATES
from app.models.otp import OTPS_COLLECTION, OtpPurpose, new_otp_document
from app.models.user import (
    USERS_COLLECTION,
    UserRole,
    UserStatus,
    new_user_document,
    normalize_email,
    public_user,
)

__all__ = [
    "CERTIFICATES_COLLECTION",
    "DEMO_CERTIFICATES",
    "OTPS_COLLECTION",
    "OtpPurpose",
    "new_otp_document",
    "USERS_COLLECTION",
    "UserRole",
    "UserStatus",
    "new_user_document",
    "normalize_email",
    "public_user",
]
