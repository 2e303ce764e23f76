"""
Dashboard data loading and display helpers.

Loading is one-shot: a short health check, then one fetch. Any failure
switches to the static demo dataset and sets ``offline`` with the reason,
logged at WARNING so the fallback is visible in the logs as well as the UI.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.frontend.api_client import ApiError, ApiUnavailableError, SkillChainClient
from app.frontend.mock_data import mock_certificates
from app.frontend.views import ISSUER_ROLES

logger = logging.getLogger(__name__)

IPFS_GATEWAY = "https://dweb.link/ipfs"

ROLE_COLORS = {
    "Students": "#6366f1",
    "Institutes": "#10b981",
    "Companies": "#8b5cf6",
}


@dataclass
class DashboardData:
    certificates: List[Dict[str, Any]] = field(default_factory=list)
    stats: Optional[Dict[str, Any]] = None
    offline: bool = False
    offline_reason: Optional[str] = None


def _check_health(client: SkillChainClient) -> Optional[str]:
    """Return why the backend is unusable, or None when healthy."""
    try:
        health = client.health()
    except (ApiError, ApiUnavailableError) as e:
        return f"health check failed: {e}"
    if health.get("status") != "ok":
        return f"backend degraded (database {health.get('dbStatus', 'unknown')})"
    return None


def load_certificates(client: SkillChainClient, appar_id: str = None, seed: bool = False) -> DashboardData:
    """
    Fetch certificates, all of them or one student's.

    With ``seed`` the demo helper endpoint runs first; its failure is ignored.
    """
    reason = _check_health(client)
    if reason is None:
        if seed:
            try:
                client.seed_check()
            except (ApiError, ApiUnavailableError) as e:
                logger.info(f"Seed check skipped: {e}")
        try:
            if appar_id:
                certificates = client.student_certificates(appar_id)
            else:
                certificates = client.list_certificates()
            return DashboardData(certificates=certificates)
        except (ApiError, ApiUnavailableError) as e:
            reason = f"certificate fetch failed: {e}"

    logger.warning(f"Switching to offline mode: {reason}")
    return DashboardData(certificates=mock_certificates(), offline=True, offline_reason=reason)


def load_admin_stats(client: SkillChainClient) -> DashboardData:
    """Admin numbers; offline has no stats rather than invented ones."""
    reason = _check_health(client)
    if reason is None:
        try:
            return DashboardData(stats=client.admin_stats())
        except (ApiError, ApiUnavailableError) as e:
            reason = f"stats fetch failed: {e}"

    logger.warning(f"Admin statistics unavailable: {reason}")
    return DashboardData(offline=True, offline_reason=reason)


def can_issue_certificates(role: Optional[str]) -> bool:
    return role in ISSUER_ROLES


def ipfs_download_url(certificate: Dict[str, Any]) -> Optional[str]:
    """Gateway link for the certificate PDF, or None without a CID."""
    cid = certificate.get("ipfsCid")
    if not cid:
        return None
    safe_filename = re.sub(r'[^a-zA-Z0-9_-]', '_', certificate.get("courseName") or "certificate")
    return f"{IPFS_GATEWAY}/{cid}?filename={safe_filename}.pdf"


def verification_checklist(certificate: Dict[str, Any]) -> List[str]:
    # Display only; none of these checks is actually performed
    return [
        "Database Record Found",
        "IPFS Hash Matches Metadata",
        "Polygon Smart Contract Verified",
    ]


def role_distribution(stats: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Rows for the user distribution chart."""
    roles = stats.get("roles", {})
    return [
        {"name": "Students", "value": roles.get("students", 0), "fill": ROLE_COLORS["Students"]},
        {"name": "Institutes", "value": roles.get("institutes", 0), "fill": ROLE_COLORS["Institutes"]},
        {"name": "Companies", "value": roles.get("companies", 0), "fill": ROLE_COLORS["Companies"]},
    ]


def new_certificate_id(now_ms: int = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"crt-{now_ms}"
