"""Aggregate numbers for the admin dashboard."""

import logging
from typing import Any, Dict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core.exceptions import ServiceUnavailableError
from app.models.user import UserRole
from app.services.certificate_service import CertificateStore
from app.services.user_service import UserStore

logger = logging.getLogger(__name__)

# Placeholder series for the "Weekly Activity" chart. There is no event log
# behind it; responses flag it with recentActivityIsSample=True.
SAMPLE_WEEKLY_ACTIVITY = [
    {"name": "Mon", "new_users": 4, "issued_certs": 12},
    {"name": "Tue", "new_users": 3, "issued_certs": 9},
    {"name": "Wed", "new_users": 7, "issued_certs": 15},
    {"name": "Thu", "new_users": 5, "issued_certs": 8},
    {"name": "Fri", "new_users": 9, "issued_certs": 21},
    {"name": "Sat", "new_users": 2, "issued_certs": 4},
    {"name": "Sun", "new_users": 1, "issued_certs": 3},
]


async def collect_admin_stats(db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Count users by role and certificates.

    Raises ServiceUnavailableError when the store cannot be reached so the
    dashboard never mistakes an outage for an empty system.
    """
    users = UserStore(db)
    certificates = CertificateStore(db)
    try:
        by_role = await users.count_by_role()
        total_users = await users.count()
        total_certificates = await certificates.count()
    except PyMongoError as e:
        logger.error(f"Admin stats unavailable, database unreachable: {e}", exc_info=True)
        raise ServiceUnavailableError("Database unavailable")

    return {
        "total_users": total_users,
        "total_certificates": total_certificates,
        "roles": {
            "students": by_role[UserRole.STUDENT.value],
            "institutes": by_role[UserRole.INSTITUTE.value],
            "companies": by_role[UserRole.COMPANY.value],
            "admins": by_role[UserRole.ADMIN.value],
        },
        "recent_activity": [dict(row) for row in SAMPLE_WEEKLY_ACTIVITY],
        "recent_activity_is_sample": True,
    }
