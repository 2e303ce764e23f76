"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status
import structlog

from app.api.deps import TokenUser, get_auth_service, get_current_user
from app.services.auth_service import AuthService
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    ResendOtpRequest,
    ResetPasswordRequest,
    SessionResponse,
    UserResponse,
    VerifyOtpRequest,
)
from app.schemas.base import MessageResponse

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Create a pending account and email a verification code."""
    result = await auth.register(
        role=request.role,
        name=request.name,
        email=request.email,
        password=request.password,
        phone=request.phone,
        appar_id=request.appar_id,
        dob=request.dob,
        institute_id=request.institute_id,
        recognition_number=request.recognition_number,
        address=request.address,
        verification_documents=request.verification_documents,
        website=request.website,
    )
    logger.info("account_registered", user_id=result["user_id"], role=request.role.value)
    return RegisterResponse(user_id=result["user_id"], email=result["email"])


@router.post("/verify-otp", response_model=SessionResponse)
async def verify_otp(request: VerifyOtpRequest, auth: AuthService = Depends(get_auth_service)):
    """Check the emailed code, activate the account and start a session."""
    return await auth.verify_otp(request.user_id, request.code)


@router.post("/login", response_model=SessionResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Login with email and password."""
    return await auth.login(request.email, request.password)


@router.post("/resend-otp", response_model=MessageResponse)
async def resend_otp(request: ResendOtpRequest, auth: AuthService = Depends(get_auth_service)):
    await auth.resend_otp(request.user_id)
    return MessageResponse(message="New code sent")


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(request: ForgotPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    """Always answers with the same message, whether or not the email exists."""
    message = await auth.forgot_password(request.email)
    return MessageResponse(message=message)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(request: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    await auth.reset_password(request.email, request.code, request.new_password)
    return MessageResponse(message="Password updated successfully")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: TokenUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    """Get current user information."""
    return await auth.get_profile(current_user.id)
