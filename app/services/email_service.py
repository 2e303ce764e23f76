"""
Outbound mail for one-time codes.

Delivery is a pluggable collaborator of the auth service:

- ``SMTPMailSender`` sends through any SMTP relay with aiosmtplib.
- ``ConsoleMailSender`` only logs the code. It exists for local development
  and is refused by the settings validator when ENVIRONMENT=production.

``get_mail_sender()`` picks one from MAIL_BACKEND.
"""

import logging
from email.message import EmailMessage

import aiosmtplib

from app.config import Settings, settings
from app.core.exceptions import MailDeliveryError
from app.models.otp import OtpPurpose

logger = logging.getLogger(__name__)


def render_code_message(code: str, purpose: OtpPurpose, expiry_minutes: int) -> tuple[str, str]:
    """Return (subject, body) for a code email."""
    if purpose == OtpPurpose.RESET:
        return (
            "Reset Your Password",
            f"Use this code to reset your SkillChain password: {code}. "
            f"It expires in {expiry_minutes} minutes.",
        )
    return (
        "Your Verification Code",
        f"Your SkillChain verification code is: {code}. "
        f"It expires in {expiry_minutes} minutes.",
    )


class MailSender:
    """Interface for delivering one-time codes."""

    async def send_code(self, to_email: str, code: str, purpose: OtpPurpose) -> None:
        raise NotImplementedError


class ConsoleMailSender(MailSender):
    """Development fallback: writes the code to the log instead of mailing it."""

    async def send_code(self, to_email: str, code: str, purpose: OtpPurpose) -> None:
        label = "RESET PASSWORD" if purpose == OtpPurpose.RESET else "VERIFICATION"
        logger.warning(
            f"[DEV MODE, development only] {label} OTP for {to_email}: {code}"
        )


class SMTPMailSender(MailSender):
    """Async SMTP delivery."""

    def __init__(self, config: Settings):
        self.host = config.SMTP_HOST
        self.port = config.SMTP_PORT
        self.user = config.SMTP_USER
        self.password = config.SMTP_PASSWORD
        self.use_tls = config.SMTP_USE_TLS
        self.from_email = config.EMAIL_FROM
        self.expiry_minutes = config.OTP_EXPIRY_MINUTES

    async def send_code(self, to_email: str, code: str, purpose: OtpPurpose) -> None:
        subject, body = render_code_message(code, purpose, self.expiry_minutes)

        message = EmailMessage()
        message["From"] = self.from_email
        message["To"] = to_email
        message["Subject"] = subject
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.user or None,
                password=self.password or None,
                start_tls=self.use_tls,
                timeout=10,
            )
        except aiosmtplib.SMTPException as e:
            logger.error(f"[Email/SMTP] Failed to send {purpose.value} code to {to_email}: {e}", exc_info=True)
            raise MailDeliveryError("Could not send the email, please try again later")
        except OSError as e:
            logger.error(f"[Email/SMTP] SMTP relay {self.host}:{self.port} unreachable: {e}", exc_info=True)
            raise MailDeliveryError("Could not send the email, please try again later")

        logger.info(f"[Email/SMTP] Sent {purpose.value} code to {to_email}")


def get_mail_sender(config: Settings = settings) -> MailSender:
    """Return the mail sender selected by MAIL_BACKEND."""
    if config.mail_backend == "smtp":
        return SMTPMailSender(config)
    return ConsoleMailSender()
