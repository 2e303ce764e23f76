"""API routes under the /api prefix."""

from fastapi import APIRouter

from app.api.routes import admin, auth, certificates

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(certificates.router, prefix="/certificates", tags=["Certificates"])
api_router.include_router(certificates.seed_router, tags=["Certificates"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])

__all__ = ["api_router"]
