"""Certificate schemas."""

from typing import Any, Dict, Optional

from pydantic import Field

from app.schemas.base import APIModel


class CertificateBase(APIModel):
    certificate_id: str = Field(..., min_length=1, max_length=100)
    student_name: str = Field(..., min_length=1, max_length=200)
    student_appar_id: str = Field(..., min_length=1, max_length=64)
    course_name: str = Field(..., min_length=1, max_length=300)
    grade: str = Field(..., min_length=1, max_length=20)
    issuer_name: str = Field(..., min_length=1, max_length=200)
    issue_date: str = Field(..., min_length=1, max_length=40)
    # Opaque display strings; never resolved or verified
    ipfs_cid: str = Field(..., min_length=1, max_length=200)
    blockchain_tx: str = Field(..., min_length=1, max_length=200)
    is_valid: bool = True
    image_url: Optional[str] = Field(None, max_length=1000)


class CertificateCreate(CertificateBase):
    pass


class CertificateUpdate(APIModel):
    """Only the issuer name may be corrected after issue."""

    issuer_name: str = Field(..., min_length=1, max_length=200)


class CertificateResponse(CertificateBase):
    id: str

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "CertificateResponse":
        return cls.model_validate({**doc, "id": str(doc["_id"])})


class SeedResponse(APIModel):
    seeded: bool
    message: str
