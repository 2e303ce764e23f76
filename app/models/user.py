"""User documents."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

USERS_COLLECTION = "users"


class UserRole(str, Enum):
    """Account roles."""

    STUDENT = "STUDENT"
    INSTITUTE = "INSTITUTE"
    COMPANY = "COMPANY"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """Account lifecycle: pending -> active, active -> suspended."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


# Which optional attributes each role keeps at registration
ROLE_FIELDS = {
    UserRole.STUDENT: ("appar_id", "dob", "institute_id"),
    UserRole.INSTITUTE: ("recognition_number", "address", "verification_documents"),
    UserRole.COMPANY: ("website",),
    UserRole.ADMIN: (),
}


def new_user_document(
    *,
    name: str,
    email: str,
    password_hash: str,
    role: UserRole,
    phone: Optional[str] = None,
    now: datetime,
    **role_fields: Any,
) -> Dict[str, Any]:
    """
    Build a pending user document.

    Role attributes that do not belong to ``role`` are dropped, and empty
    ones are omitted entirely so the sparse ``appar_id`` index stays sparse.
    """
    doc: Dict[str, Any] = {
        "name": name,
        "email": normalize_email(email),
        "password_hash": password_hash,
        "role": role.value,
        "status": UserStatus.PENDING.value,
        "is_verified": False,
        "created_at": now,
        "updated_at": now,
    }
    if phone:
        doc["phone"] = phone
    for field in ROLE_FIELDS[role]:
        value = role_fields.get(field)
        if value not in (None, ""):
            doc[field] = value
    return doc


def normalize_email(email: str) -> str:
    return email.strip().lower()


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitized projection returned to clients (never the password hash)."""
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name"),
        "email": doc.get("email"),
        "role": doc.get("role"),
        "status": doc.get("status"),
        "appar_id": doc.get("appar_id"),
        "recognition_number": doc.get("recognition_number"),
        "is_verified": bool(doc.get("is_verified", False)),
    }
