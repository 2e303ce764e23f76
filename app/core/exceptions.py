"""
Domain exceptions.

Services raise these instead of HTTPException so the same rules can be used
outside a request (scripts, tests). ``app.main`` registers a handler that
renders any ``SkillChainError`` as ``{"detail": ..., "code": ..., **extra}``.
"""

from typing import Any, Dict, Optional

from fastapi import status


class SkillChainError(Exception):
    """Base exception for all application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.message = message
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "code": self.code, **self.extra}


# ============================================
# Validation
# ============================================

class ValidationFailedError(SkillChainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_FAILED"


# ============================================
# Authentication & Authorization
# ============================================

class InvalidCredentialsError(SkillChainError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class AccountNotActiveError(SkillChainError):
    """Login attempted on an account that has not reached `active`."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "ACCOUNT_NOT_ACTIVE"

    def __init__(self, user_id: str, account_status: str):
        super().__init__(
            "Account not active",
            extra={"userId": user_id, "status": account_status},
        )


class PermissionDeniedError(SkillChainError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "PERMISSION_DENIED"


# ============================================
# Resources
# ============================================

class NotFoundError(SkillChainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(SkillChainError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


# ============================================
# One-time codes
# ============================================

class InvalidCodeError(SkillChainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_CODE"


class CodeExpiredError(SkillChainError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "CODE_EXPIRED"


class TooManyAttemptsError(SkillChainError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "TOO_MANY_ATTEMPTS"


class RateLimitedError(SkillChainError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMITED"


# ============================================
# Infrastructure
# ============================================

class ServiceUnavailableError(SkillChainError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "SERVICE_UNAVAILABLE"


class MailDeliveryError(SkillChainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "MAIL_DELIVERY_FAILED"
