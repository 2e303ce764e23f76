"""
HTTP client for the SkillChain API.

Synchronous on purpose: the Streamlit UI calls it from its script thread.
Non-2xx responses raise ``ApiError``; timeouts and connection failures raise
``ApiUnavailableError`` so callers can tell an outage from a refusal.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, payload: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}
        super().__init__(f"{status_code}: {message}")


class ApiUnavailableError(Exception):
    """The API could not be reached (timeout, refused connection, DNS...)."""


class SkillChainClient:
    """Thin wrapper over every REST endpoint."""

    def __init__(
        self,
        base_url: str = None,
        token: Optional[str] = None,
        timeout: float = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else settings.CLIENT_TIMEOUT_SECONDS
        self._client = httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, json: Any = None, timeout: float = None) -> Any:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = self._client.request(
                method,
                path,
                json=json,
                headers=headers,
                timeout=timeout if timeout is not None else self.timeout,
            )
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiUnavailableError(str(e)) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("detail") if isinstance(data, dict) else None
            if not isinstance(message, str):
                message = response.reason_phrase or "Request failed"
            raise ApiError(response.status_code, message, data if isinstance(data, dict) else None)
        return data

    # Health -----------------------------------------------------------

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health", timeout=settings.HEALTH_TIMEOUT_SECONDS)

    # Auth -------------------------------------------------------------

    def register(self, **fields: Any) -> Dict[str, Any]:
        """Fields use the wire names: role, name, email, password, phone, apparId..."""
        body = {key: value for key, value in fields.items() if value not in (None, "")}
        return self._request("POST", "/api/auth/register", json=body)

    def verify_otp(self, user_id: str, code: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/verify-otp", json={"userId": user_id, "code": code})

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/login", json={"email": email, "password": password})

    def resend_otp(self, user_id: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/resend-otp", json={"userId": user_id})

    def forgot_password(self, email: str) -> Dict[str, Any]:
        return self._request("POST", "/api/auth/forgot-password", json={"email": email})

    def reset_password(self, email: str, code: str, new_password: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/api/auth/reset-password",
            json={"email": email, "code": code, "newPassword": new_password},
        )

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/api/auth/me")

    # Certificates -----------------------------------------------------

    def list_certificates(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/certificates")

    def student_certificates(self, appar_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/certificates/student/{appar_id}")

    def get_certificate(self, certificate_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/certificates/{certificate_id}")

    def create_certificate(self, certificate: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/certificates", json=certificate)

    def update_certificate_issuer(self, certificate_id: str, issuer_name: str) -> Dict[str, Any]:
        return self._request(
            "PUT", f"/api/certificates/{certificate_id}", json={"issuerName": issuer_name}
        )

    def seed_check(self) -> Dict[str, Any]:
        return self._request("GET", "/api/seed-check")

    # Admin ------------------------------------------------------------

    def admin_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/admin/stats")
