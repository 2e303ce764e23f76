"""Admin dashboard endpoints."""

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
import structlog

from app.api.deps import TokenUser, get_db, require_admin
from app.schemas.admin import AdminStats
from app.services.stats_service import collect_admin_stats

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/stats", response_model=AdminStats)
async def get_admin_stats(
    current_user: TokenUser = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_db),
):
    """
    User counts by role, certificate total and the weekly activity series.

    **RBAC**: Admin only. Answers 503 when the database is unreachable.
    """
    stats = await collect_admin_stats(db)
    logger.debug("admin_stats_served", admin_id=current_user.id, total_users=stats["total_users"])
    return stats
