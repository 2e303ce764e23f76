"""One-time code documents."""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict

from bson import ObjectId

OTPS_COLLECTION = "otps"


class OtpPurpose(str, Enum):
    VERIFICATION = "verification"
    RESET = "reset"


def new_otp_document(
    *,
    user_id: ObjectId,
    code_hash: str,
    purpose: OtpPurpose,
    now: datetime,
    ttl: timedelta,
) -> Dict[str, Any]:
    """Build a fresh code record with a zero attempt counter."""
    return {
        "user_id": user_id,
        "purpose": purpose.value,
        "channel": "email",
        "code_hash": code_hash,
        "expires_at": now + ttl,
        "attempts": 0,
        "created_at": now,
    }
