"""Admin dashboard and health schemas."""

from typing import List

from app.schemas.base import APIModel


class RoleCounts(APIModel):
    students: int
    institutes: int
    companies: int
    admins: int


class ActivityPoint(APIModel):
    name: str
    new_users: int
    issued_certs: int


class AdminStats(APIModel):
    total_users: int
    total_certificates: int
    roles: RoleCounts
    recent_activity: List[ActivityPoint]
    # The weekly series is fixed sample data, not an aggregation
    recent_activity_is_sample: bool = True


class HealthResponse(APIModel):
    status: str
    db_status: str
    timestamp: str
