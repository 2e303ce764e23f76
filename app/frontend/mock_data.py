"""Static data shown while the API is unreachable."""

from typing import Any, Dict, List

from app.models.certificate import DEMO_CERTIFICATES
from app.schemas.certificate import CertificateResponse

OFFLINE_BANNER = "Backend unavailable. Showing demo data in offline mode."


def mock_certificates() -> List[Dict[str, Any]]:
    """The demo certificates in wire format, with ids "1", "2"..."""
    return [
        CertificateResponse.model_validate({**cert, "id": str(index)}).model_dump(by_alias=True)
        for index, cert in enumerate(DEMO_CERTIFICATES, start=1)
    ]
