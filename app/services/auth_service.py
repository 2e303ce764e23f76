"""
Authentication and account services:
- register (create pending user + issue verification code)
- verify OTP (activate account, consume codes, issue token)
- login (credentials + active status)
- resend OTP (60 second cooldown)
- forgot / reset password

The multi-document sequences (activate + consume codes, update password +
consume codes) are not transactional. Each step is idempotent and the
consuming delete always runs last, so if the process dies in between, the
same code is still on file and submitting it again finishes the job.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.config import Settings, settings
from app.core.exceptions import (
    AccountNotActiveError,
    CodeExpiredError,
    ConflictError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    RateLimitedError,
    TooManyAttemptsError,
    ValidationFailedError,
)
from app.core.security import (
    create_access_token,
    generate_numeric_code,
    hash_secret,
    verify_secret,
)
from app.models.otp import OtpPurpose
from app.models.user import UserRole, UserStatus, new_user_document, public_user
from app.services.email_service import MailSender
from app.services.otp_service import OtpStore
from app.services.user_service import UserStore, parse_object_id

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account exists with this email, a reset code has been sent."


class AuthService:
    """Orchestrates the account lifecycle over the user and code stores."""

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        mail_sender: MailSender,
        config: Settings = settings,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.users = UserStore(db)
        self.otps = OtpStore(db)
        self.mail_sender = mail_sender
        self.config = config
        self.clock = clock

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _issue_code(self, user_id: ObjectId, email: str, purpose: OtpPurpose) -> None:
        """Create a hashed code record and mail the plaintext code."""
        code = generate_numeric_code(self.config.OTP_LENGTH)
        await self.otps.create(
            user_id,
            hash_secret(code, self.config.BCRYPT_ROUNDS),
            purpose,
            now=self.clock(),
            ttl=timedelta(minutes=self.config.OTP_EXPIRY_MINUTES),
        )
        await self.mail_sender.send_code(email, code, purpose)

    async def _check_code(self, user_id: ObjectId, code: str) -> None:
        """
        Validate ``code`` against the newest record for the user.

        A mismatch increments the attempt counter and that write is kept even
        though the call fails. The attempt that reaches the limit already
        answers with TooManyAttemptsError.
        """
        record = await self.otps.latest_for_user(user_id)
        if record is None:
            raise InvalidCodeError("Invalid or expired OTP")

        if record["expires_at"] < self.clock():
            raise CodeExpiredError("OTP has expired")

        max_attempts = self.config.OTP_MAX_ATTEMPTS
        if record.get("attempts", 0) >= max_attempts:
            raise TooManyAttemptsError("Too many failed attempts. Request a new code.")

        if not verify_secret(code, record["code_hash"]):
            attempts = await self.otps.record_failed_attempt(record["_id"])
            logger.info(f"Wrong code for user {user_id} ({attempts}/{max_attempts})")
            if attempts >= max_attempts:
                raise TooManyAttemptsError("Too many failed attempts. Request a new code.")
            raise InvalidCodeError("Invalid OTP code")

    def _session_payload(self, user: Dict[str, Any]) -> Dict[str, Any]:
        token = create_access_token(str(user["_id"]), user["role"])
        return {"token": token, "user": public_user(user)}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def register(
        self,
        *,
        role: UserRole,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        **role_fields: Any,
    ) -> Dict[str, str]:
        """Create a pending account and send its verification code."""
        if await self.users.get_by_email(email):
            raise ConflictError("User already exists")

        if role == UserRole.ADMIN:
            raise ValidationFailedError("Admin accounts cannot be self-registered")

        appar_id = role_fields.get("appar_id")
        if role == UserRole.STUDENT and appar_id and await self.users.appar_id_taken(appar_id):
            raise ConflictError("APPAR ID already registered")

        now = self.clock()
        doc = new_user_document(
            name=name,
            email=email,
            password_hash=hash_secret(password, self.config.BCRYPT_ROUNDS),
            role=role,
            phone=phone,
            now=now,
            **role_fields,
        )
        user_id = await self.users.create(doc)
        logger.info(f"Registered {role.value} account {user_id} (pending)")

        await self._issue_code(user_id, doc["email"], OtpPurpose.VERIFICATION)

        return {"user_id": str(user_id), "email": doc["email"]}

    async def verify_otp(self, user_id: str, code: str) -> Dict[str, Any]:
        """Activate the account behind ``user_id`` and return a session."""
        oid = parse_object_id(user_id)
        if oid is None:
            raise InvalidCodeError("Invalid or expired OTP")

        await self._check_code(oid, code)

        user = await self.users.activate(oid, self.clock())
        if user is None:
            raise InvalidCodeError("Invalid or expired OTP")
        await self.otps.delete_for_user(oid)

        logger.info(f"User {user_id} verified and activated")
        return self._session_payload(user)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        user = await self.users.get_by_email(email)
        # Unknown email and wrong password share one message
        if user is None or not verify_secret(password, user.get("password_hash", "")):
            raise InvalidCredentialsError()

        if user.get("status") != UserStatus.ACTIVE.value:
            raise AccountNotActiveError(str(user["_id"]), user.get("status"))

        return self._session_payload(user)

    async def resend_otp(self, user_id: str) -> None:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        last = await self.otps.latest_for_user(user["_id"])
        cooldown = timedelta(seconds=self.config.OTP_RESEND_COOLDOWN_SECONDS)
        if last is not None and self.clock() - last["created_at"] < cooldown:
            raise RateLimitedError("Please wait before resending.")

        await self._issue_code(user["_id"], user["email"], OtpPurpose.VERIFICATION)

    async def forgot_password(self, email: str) -> str:
        """Send a reset code when the account exists; the reply never says."""
        user = await self.users.get_by_email(email)
        if user is not None:
            await self._issue_code(user["_id"], user["email"], OtpPurpose.RESET)
        else:
            logger.info("Password reset requested for unknown email")
        return FORGOT_PASSWORD_MESSAGE

    async def reset_password(self, email: str, code: str, new_password: str) -> None:
        user = await self.users.get_by_email(email)
        if user is None:
            raise ValidationFailedError("Invalid request")

        await self._check_code(user["_id"], code)

        await self.users.set_password(
            user["_id"], hash_secret(new_password, self.config.BCRYPT_ROUNDS), self.clock()
        )
        await self.otps.delete_for_user(user["_id"])
        logger.info(f"Password reset for user {user['_id']}")

    async def get_profile(self, user_id: str) -> Dict[str, Any]:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return public_user(user)
