"""
Client-side session handling.

A ``Session`` pairs the sanitized user projection returned by the API with its
bearer token. ``SessionStore`` persists one to a local JSON file, and only
when the user ticked "remember me" at login.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    user: Dict[str, Any]
    token: str

    @property
    def role(self) -> Optional[str]:
        return self.user.get("role")

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id")

    @property
    def name(self) -> str:
        return self.user.get("name") or self.user.get("email", "")

    def to_dict(self) -> Dict[str, Any]:
        return {"user": self.user, "token": self.token}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(user=dict(data["user"]), token=data["token"])


class SessionStore:
    """JSON file holding at most one remembered session."""

    def __init__(self, file_path: str = None):
        self.file_path = os.path.expanduser(file_path or settings.SESSION_FILE)

    def save(self, session: Session) -> None:
        directory = os.path.dirname(self.file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.file_path, 'w') as f:
            json.dump(session.to_dict(), f, indent=2)
        # The file holds a bearer token
        os.chmod(self.file_path, 0o600)
        logger.info(f"Session remembered in {self.file_path}")

    def load(self) -> Optional[Session]:
        """Return the remembered session, or None when absent or unreadable."""
        if not os.path.exists(self.file_path):
            return None
        try:
            with open(self.file_path, 'r') as f:
                return Session.from_dict(json.load(f))
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.error(f"Corrupt session file {self.file_path}, ignoring: {e}")
            return None

    def clear(self) -> None:
        if os.path.exists(self.file_path):
            os.remove(self.file_path)
            logger.info("Remembered session cleared")
