"""Security utilities: JWT, password/code hashing, RBAC."""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from app.config import settings
from app.core.exceptions import PermissionDeniedError
from app.models.user import UserRole

# HTTPBearer for simple token authentication in Swagger (just paste the access token)
security = HTTPBearer(auto_error=False)

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class TokenUser:
    """Identity carried by a verified access token."""

    id: str
    role: UserRole


def _secret_bytes(secret: str) -> bytes:
    return secret.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_secret(secret: str, rounds: Optional[int] = None) -> str:
    """Salted adaptive hash used for both passwords and one-time codes."""
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_secret_bytes(secret), salt).decode("utf-8")


def verify_secret(secret: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_secret_bytes(secret), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        # Malformed stored hash
        return False


def generate_numeric_code(length: Optional[int] = None) -> str:
    """Uniformly random numeric code with no leading-zero bias."""
    length = length or settings.OTP_LENGTH
    return "".join(secrets.choice("0123456789") for _ in range(length))


def create_access_token(user_id: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token carrying the user id and role."""
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": user_id,
        "id": user_id,
        "role": role,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenUser:
    """
    Get the caller from the Bearer token.

    Only the signed claims are consulted, so role checks keep working while
    the database is unreachable.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(credentials.credentials)

    user_id = payload.get("sub")
    role = payload.get("role")
    if user_id is None or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    try:
        user_role = UserRole(role)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    return TokenUser(id=user_id, role=user_role)


def require_role(*allowed_roles: UserRole):
    """Dependency to check if user has one of the required roles."""

    async def role_checker(current_user: TokenUser = Depends(get_current_user)) -> TokenUser:
        if current_user.role in allowed_roles:
            return current_user

        raise PermissionDeniedError(f"Insufficient permissions. Required: {[r.value for r in allowed_roles]}")

    return role_checker


# Issuers are institutes; admins may act on their behalf
require_issuer = require_role(UserRole.INSTITUTE, UserRole.ADMIN)
require_admin = require_role(UserRole.ADMIN)
