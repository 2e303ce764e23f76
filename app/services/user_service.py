"""User store backed by the `users` collection."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Union

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ConflictError
from app.models.user import USERS_COLLECTION, UserRole, UserStatus, normalize_email

logger = logging.getLogger(__name__)


def parse_object_id(value: Union[str, ObjectId, None]) -> Optional[ObjectId]:
    """Return an ObjectId, or None for anything that cannot be one."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class UserStore:
    """CRUD over user documents."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[USERS_COLLECTION]

    async def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"email": normalize_email(email)})

    async def get_by_id(self, user_id: Union[str, ObjectId]) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(user_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def appar_id_taken(self, appar_id: str) -> bool:
        return await self.collection.find_one({"appar_id": appar_id}, {"_id": 1}) is not None

    async def create(self, doc: Dict[str, Any]) -> ObjectId:
        """Insert a user; a unique-index collision becomes a ConflictError."""
        try:
            result = await self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.info(f"Duplicate user rejected for {doc.get('email')}")
            raise ConflictError("User already exists")
        return result.inserted_id

    async def activate(self, user_id: ObjectId, now: datetime) -> Optional[Dict[str, Any]]:
        """Set status to active. Idempotent."""
        return await self.collection.find_one_and_update(
            {"_id": user_id},
            {"$set": {"status": UserStatus.ACTIVE.value, "is_verified": True, "updated_at": now}},
            return_document=ReturnDocument.AFTER,
        )

    async def set_password(self, user_id: ObjectId, password_hash: str, now: datetime) -> None:
        await self.collection.update_one(
            {"_id": user_id},
            {"$set": {"password_hash": password_hash, "updated_at": now}},
        )

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def count_by_role(self) -> Dict[str, int]:
        counts = {}
        for role in UserRole:
            counts[role.value] = await self.collection.count_documents({"role": role.value})
        return counts
