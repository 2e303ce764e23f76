"""Certificate endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
import structlog

from app.api.deps import TokenUser, get_certificate_store, require_issuer
from app.core.exceptions import NotFoundError
from app.schemas.certificate import (
    CertificateCreate,
    CertificateResponse,
    CertificateUpdate,
    SeedResponse,
)
from app.services.certificate_service import CertificateStore

logger = structlog.get_logger(__name__)

router = APIRouter()
seed_router = APIRouter()


@router.get("", response_model=List[CertificateResponse])
async def list_certificates(store: CertificateStore = Depends(get_certificate_store)):
    """All certificates, newest first."""
    docs = await store.list_all()
    return [CertificateResponse.from_document(doc) for doc in docs]


@router.post("", response_model=CertificateResponse, status_code=status.HTTP_201_CREATED)
async def create_certificate(
    certificate_in: CertificateCreate,
    current_user: TokenUser = Depends(require_issuer),
    store: CertificateStore = Depends(get_certificate_store),
):
    """
    Issue a certificate.

    **RBAC**: Institute, Admin
    """
    doc = await store.create(certificate_in.model_dump())
    logger.info(
        "certificate_issued",
        certificate_id=doc["certificate_id"],
        issued_by=current_user.id,
    )
    return CertificateResponse.from_document(doc)


@router.get("/student/{appar_id}", response_model=List[CertificateResponse])
async def list_student_certificates(
    appar_id: str,
    store: CertificateStore = Depends(get_certificate_store),
):
    """Certificates whose studentApparId equals ``appar_id``."""
    docs = await store.list_for_student(appar_id)
    return [CertificateResponse.from_document(doc) for doc in docs]


@router.get("/{certificate_id}", response_model=CertificateResponse)
async def get_certificate(
    certificate_id: str,
    store: CertificateStore = Depends(get_certificate_store),
):
    """Single certificate for the public verification page."""
    doc = await store.get(certificate_id)
    if doc is None:
        raise NotFoundError("Certificate not found")
    return CertificateResponse.from_document(doc)


@router.put("/{certificate_id}", response_model=CertificateResponse)
async def update_certificate(
    certificate_id: str,
    update: CertificateUpdate,
    current_user: TokenUser = Depends(require_issuer),
    store: CertificateStore = Depends(get_certificate_store),
):
    """
    Correct the issuer name.

    **RBAC**: Institute, Admin
    """
    doc = await store.update_issuer(certificate_id, update.issuer_name)
    logger.info("certificate_issuer_updated", certificate_id=certificate_id, updated_by=current_user.id)
    return CertificateResponse.from_document(doc)


@seed_router.get("/seed-check", response_model=SeedResponse)
async def seed_check(store: CertificateStore = Depends(get_certificate_store)):
    """Demo helper: populate the certificates collection when it is empty."""
    if await store.seed_if_empty():
        return SeedResponse(seeded=True, message="Database seeded")
    return SeedResponse(seeded=False, message="Database already has data")
