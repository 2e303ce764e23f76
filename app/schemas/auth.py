"""Authentication schemas."""

from typing import Optional

from pydantic import EmailStr, Field

from app.models.user import UserRole
from app.schemas.base import APIModel


class RegisterRequest(APIModel):
    """Register request schema. Role-specific fields are kept only for their role."""

    role: UserRole = UserRole.STUDENT
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    phone: Optional[str] = Field(None, max_length=20)

    # Student
    appar_id: Optional[str] = Field(None, max_length=64)
    dob: Optional[str] = None
    institute_id: Optional[str] = None

    # Institute
    recognition_number: Optional[str] = Field(None, max_length=64)
    address: Optional[str] = Field(None, max_length=500)
    verification_documents: Optional[str] = None

    # Company
    website: Optional[str] = Field(None, max_length=300)


class RegisterResponse(APIModel):
    user_id: str
    email: str
    message: str = "Account created. Please verify your email."


class VerifyOtpRequest(APIModel):
    user_id: str
    code: str = Field(..., min_length=1, max_length=12)


class LoginRequest(APIModel):
    """Login request schema."""

    email: EmailStr
    password: str


class ResendOtpRequest(APIModel):
    user_id: str


class ForgotPasswordRequest(APIModel):
    email: EmailStr


class ResetPasswordRequest(APIModel):
    email: EmailStr
    code: str = Field(..., min_length=1, max_length=12)
    new_password: str = Field(..., min_length=6, max_length=128)


class UserResponse(APIModel):
    """Sanitized user projection."""

    id: str
    name: Optional[str] = None
    email: str
    role: UserRole
    status: str
    appar_id: Optional[str] = None
    recognition_number: Optional[str] = None
    is_verified: bool = False


class SessionResponse(APIModel):
    """Bearer token plus the user it was issued to."""

    token: str
    user: UserResponse
