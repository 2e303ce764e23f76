"""Application configuration using Pydantic Settings."""

from typing import List, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET_KEY = "dev_secret_12345"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "SkillChain Credentials API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: Union[str, List[str]] = ["http://localhost:5173"]

    # MongoDB
    MONGODB_URI: str = Field(default="mongodb://127.0.0.1:27017")
    MONGODB_DATABASE: str = "skillchain"
    MONGODB_TIMEOUT_MS: int = 5000

    # JWT
    SECRET_KEY: str = Field(default=DEV_SECRET_KEY)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days

    # Password / OTP policy
    BCRYPT_ROUNDS: int = 10
    OTP_LENGTH: int = 6
    OTP_EXPIRY_MINUTES: int = 10
    OTP_MAX_ATTEMPTS: int = 5
    OTP_RESEND_COOLDOWN_SECONDS: int = 60

    # Email
    MAIL_BACKEND: str = "auto"  # smtp, console or auto
    SMTP_HOST: str = ""
    SMTP_PORT: int = 587
    SMTP_USER: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_USE_TLS: bool = True
    EMAIL_FROM: str = '"SkillChain" <no-reply@skillchain.com>'

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    # Monitoring
    SENTRY_DSN: str = ""
    SENTRY_ENVIRONMENT: str = "production"
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Frontend client
    API_BASE_URL: str = "http://localhost:5000"
    CLIENT_TIMEOUT_SECONDS: float = 8.0
    HEALTH_TIMEOUT_SECONDS: float = 2.0
    SESSION_FILE: str = "~/.skillchain/session.json"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v):
        """Parse comma-separated origins."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def mail_backend(self) -> str:
        """Resolve the configured mail backend to `smtp` or `console`."""
        backend = self.MAIL_BACKEND.lower()
        if backend == "auto":
            return "smtp" if self.SMTP_HOST else "console"
        return backend

    @model_validator(mode="after")
    def require_production_config(self):
        """Development defaults are refused outright in production."""
        if not self.is_production:
            return self
        problems = []
        if self.SECRET_KEY == DEV_SECRET_KEY or len(self.SECRET_KEY) < 32:
            problems.append("SECRET_KEY must be set to a random value of at least 32 characters")
        if self.mail_backend != "smtp" or not self.SMTP_HOST:
            problems.append("SMTP_HOST must be configured; console OTP delivery is development only")
        if problems:
            raise ValueError("; ".join(problems))
        return self


# Create global settings instance
settings = Settings()
