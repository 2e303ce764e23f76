"""Startup validation checks for the application."""

import logging as log_module

from app.config import DEV_SECRET_KEY, Settings

logger = log_module.getLogger(__name__)


def check_development_defaults(config: Settings) -> list:
    """
    Warn about settings that are only acceptable outside production.

    Production refuses these at load time (see ``Settings``); here they are
    merely logged so a developer notices them.

    Returns:
        list: One message per development default still in use
    """
    warnings = []
    if config.SECRET_KEY == DEV_SECRET_KEY:
        warnings.append("SECRET_KEY is the built-in development value")
    if config.mail_backend == "console":
        warnings.append("Verification codes are written to the log instead of being emailed")
    if config.DEBUG:
        warnings.append("DEBUG is on; internal error messages are returned to clients")

    for message in warnings:
        logger.warning(f"⚠️  {message} (development only)")
    return warnings


def run_startup_checks(config: Settings) -> bool:
    """Run all startup checks. Returns True when nothing needed a warning."""
    logger.info(f"Starting {config.APP_NAME} v{config.APP_VERSION} ({config.ENVIRONMENT})")
    return not check_development_defaults(config)
