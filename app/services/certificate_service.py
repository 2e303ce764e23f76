"""Certificate store backed by the `certificates` collection."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictError, NotFoundError
from app.models.certificate import CERTIFICATES_COLLECTION, DEMO_CERTIFICATES

logger = logging.getLogger(__name__)


class CertificateStore:
    """Plain CRUD; the only invariant is a unique certificate_id."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[CERTIFICATES_COLLECTION]

    async def list_all(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find().sort([("created_at", DESCENDING), ("_id", DESCENDING)])
        return await cursor.to_list(length=None)

    async def list_for_student(self, appar_id: str) -> List[Dict[str, Any]]:
        cursor = self.collection.find({"student_appar_id": appar_id}).sort("created_at", DESCENDING)
        return await cursor.to_list(length=None)

    async def get(self, certificate_id: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"certificate_id": certificate_id})

    async def create(self, data: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or datetime.utcnow()
        doc = {**data, "created_at": now, "updated_at": now}
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(
                f"Certificate {data.get('certificate_id')} already exists"
            )
        doc["_id"] = result.inserted_id
        logger.info(f"Certificate {doc['certificate_id']} issued by {doc.get('issuer_name')}")
        return doc

    async def update_issuer(self, certificate_id: str, issuer_name: str) -> Dict[str, Any]:
        doc = await self.collection.find_one_and_update(
            {"certificate_id": certificate_id},
            {"$set": {"issuer_name": issuer_name, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise NotFoundError("Certificate not found")
        return doc

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def seed_if_empty(self) -> bool:
        """Insert the demo certificates when the collection is empty."""
        if await self.count() > 0:
            return False
        now = datetime.utcnow()
        await self.collection.insert_many(
            [{**cert, "created_at": now, "updated_at": now} for cert in DEMO_CERTIFICATES]
        )
        logger.info("Database seeded with demo certificates")
        return True
