"""
API Dependencies
Common dependencies for API endpoints (database, mail, services, authorization)
"""

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.security import TokenUser, get_current_user, require_admin, require_issuer
from app.db.session import get_db
from app.services.auth_service import AuthService
from app.services.certificate_service import CertificateStore
from app.services.email_service import MailSender
from app.services.email_service import get_mail_sender as build_mail_sender

__all__ = [
    "TokenUser",
    "get_auth_service",
    "get_certificate_store",
    "get_current_user",
    "get_db",
    "get_mail_sender",
    "require_admin",
    "require_issuer",
]


def get_mail_sender() -> MailSender:
    """Mail sender chosen by configuration."""
    return build_mail_sender()


def get_auth_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    mail_sender: MailSender = Depends(get_mail_sender),
) -> AuthService:
    return AuthService(db, mail_sender)


def get_certificate_store(db: AsyncIOMotorDatabase = Depends(get_db)) -> CertificateStore:
    return CertificateStore(db)
