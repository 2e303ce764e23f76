"""View routing for the client UI."""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from app.frontend.session import Session, SessionStore

logger = logging.getLogger(__name__)

ISSUER_ROLES = ("INSTITUTE", "ADMIN")


class View(str, Enum):
    LANDING = "LANDING"
    LOGIN = "LOGIN"
    SIGNUP = "SIGNUP"
    VERIFY_OTP = "VERIFY_OTP"
    FORGOT_PASSWORD = "FORGOT_PASSWORD"
    RESET_PASSWORD = "RESET_PASSWORD"
    ADD_CERTIFICATE = "ADD_CERTIFICATE"
    DASHBOARD = "DASHBOARD"


PROTECTED_VIEWS = (View.DASHBOARD, View.ADD_CERTIFICATE)


class ViewController:
    """
    Holds the current view, the session and the context handed between views.

    - Protected views redirect to LOGIN while there is no session.
    - ADD_CERTIFICATE additionally needs an issuer role, otherwise DASHBOARD.
    - Registration and a "pending" login go to VERIFY_OTP with
      ``pending_verification = {"userId", "email"}``.
    - A forgot-password request goes to RESET_PASSWORD with ``reset_email``.
    """

    def __init__(self, store: Optional[SessionStore] = None):
        self.store = store
        self.view = View.LANDING
        self.session: Optional[Session] = None
        self.pending_verification: Optional[Dict[str, str]] = None
        self.reset_email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def is_issuer(self) -> bool:
        return self.session is not None and self.session.role in ISSUER_ROLES

    def restore(self) -> bool:
        """Pick up a remembered session at start-up."""
        if self.store is None:
            return False
        session = self.store.load()
        if session is None:
            return False
        self.session = session
        self.view = View.DASHBOARD
        return True

    def navigate(self, view: View) -> View:
        if view in PROTECTED_VIEWS and not self.is_authenticated:
            logger.info(f"{view.value} requires a session, redirecting to login")
            view = View.LOGIN
        elif view == View.ADD_CERTIFICATE and not self.is_issuer:
            view = View.DASHBOARD
        elif view == View.VERIFY_OTP and self.pending_verification is None:
            view = View.SIGNUP
        elif view == View.RESET_PASSWORD and self.reset_email is None:
            view = View.FORGOT_PASSWORD
        self.view = view
        return view

    def login_succeeded(self, payload: Dict[str, Any], remember: bool = False) -> View:
        """``payload`` is the ``{token, user}`` body of login or verify-otp."""
        self.session = Session(user=dict(payload["user"]), token=payload["token"])
        self.pending_verification = None
        if self.store is not None:
            if remember:
                self.store.save(self.session)
            else:
                self.store.clear()
        return self.navigate(View.DASHBOARD)

    def verification_required(self, user_id: str, email: str) -> View:
        self.pending_verification = {"userId": user_id, "email": email}
        return self.navigate(View.VERIFY_OTP)

    def reset_requested(self, email: str) -> View:
        self.reset_email = email
        return self.navigate(View.RESET_PASSWORD)

    def reset_completed(self) -> View:
        self.reset_email = None
        return self.navigate(View.LOGIN)

    def logout(self) -> View:
        self.session = None
        self.pending_verification = None
        self.reset_email = None
        if self.store is not None:
            self.store.clear()
        return self.navigate(View.LANDING)
