"""Tests for code delivery."""

import logging

import aiosmtplib
import pytest

from app.config import Settings
from app.core.exceptions import MailDeliveryError
from app.models.otp import OtpPurpose
from app.services.email_service import (
    ConsoleMailSender,
    SMTPMailSender,
    get_mail_sender,
    render_code_message,
)


def test_render_messages():
    subject, body = render_code_message("123456", OtpPurpose.VERIFICATION, 10)
    reset_subject, reset_body = render_code_message("654321", OtpPurpose.RESET, 10)

    assert subject == "Your Verification Code"
    assert "123456" in body
    assert reset_subject == "Reset Your Password"
    assert "654321" in reset_body


def test_backend_selection():
    assert isinstance(get_mail_sender(Settings(MAIL_BACKEND="console")), ConsoleMailSender)
    assert isinstance(
        get_mail_sender(Settings(MAIL_BACKEND="auto", SMTP_HOST="smtp.example.com")), SMTPMailSender
    )


@pytest.mark.asyncio
async def test_console_sender_logs_code(caplog):
    with caplog.at_level(logging.WARNING, logger="app.services.email_service"):
        await ConsoleMailSender().send_code("a@example.com", "123456", OtpPurpose.VERIFICATION)

    assert "123456" in caplog.text
    assert "development only" in caplog.text


@pytest.mark.asyncio
async def test_smtp_sender_builds_message(monkeypatch):
    captured = {}

    async def fake_send(message, **kwargs):
        captured["message"] = message
        captured.update(kwargs)

    monkeypatch.setattr(aiosmtplib, "send", fake_send)
    sender = SMTPMailSender(Settings(MAIL_BACKEND="smtp", SMTP_HOST="smtp.example.com", SMTP_PORT=2525))

    await sender.send_code("a@example.com", "123456", OtpPurpose.RESET)

    assert captured["hostname"] == "smtp.example.com"
    assert captured["port"] == 2525
    assert captured["message"]["To"] == "a@example.com"
    assert captured["message"]["Subject"] == "Reset Your Password"


@pytest.mark.asyncio
async def test_smtp_failure_raises(monkeypatch):
    async def failing_send(message, **kwargs):
        raise aiosmtplib.SMTPException("relay refused")

    monkeypatch.setattr(aiosmtplib, "send", failing_send)
    sender = SMTPMailSender(Settings(MAIL_BACKEND="smtp", SMTP_HOST="smtp.example.com"))

    with pytest.raises(MailDeliveryError):
        await sender.send_code("a@example.com", "123456", OtpPurpose.VERIFICATION)
