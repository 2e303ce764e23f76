"""Tests for settings validation."""

import pytest

from app.config import DEV_SECRET_KEY, Settings

PRODUCTION_SECRET = "p" * 48


def test_development_defaults_allowed():
    config = Settings(ENVIRONMENT="development", SECRET_KEY=DEV_SECRET_KEY, MAIL_BACKEND="auto", SMTP_HOST="")

    assert config.mail_backend == "console"
    assert not config.is_production


def test_production_rejects_dev_secret():
    with pytest.raises(ValueError, match="SECRET_KEY"):
        Settings(
            ENVIRONMENT="production",
            SECRET_KEY=DEV_SECRET_KEY,
            MAIL_BACKEND="smtp",
            SMTP_HOST="smtp.example.com",
        )


def test_production_rejects_console_mail():
    with pytest.raises(ValueError, match="SMTP_HOST"):
        Settings(ENVIRONMENT="production", SECRET_KEY=PRODUCTION_SECRET, MAIL_BACKEND="console")


def test_production_with_real_config():
    config = Settings(
        ENVIRONMENT="production",
        SECRET_KEY=PRODUCTION_SECRET,
        MAIL_BACKEND="auto",
        SMTP_HOST="smtp.example.com",
    )

    assert config.is_production
    assert config.mail_backend == "smtp"


def test_cors_origins_comma_separated():
    config = Settings(CORS_ORIGINS="http://a.example.com, http://b.example.com")

    assert config.CORS_ORIGINS == ["http://a.example.com", "http://b.example.com"]


def test_api_base_url_trailing_slash():
    assert Settings(API_BASE_URL="http://localhost:5000/").API_BASE_URL == "http://localhost:5000"
