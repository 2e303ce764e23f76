"""One-time code store backed by the `otps` collection."""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from app.models.otp import OTPS_COLLECTION, OtpPurpose, new_otp_document


class OtpStore:
    """
    Short-lived hashed codes.

    Only the most recently created record for a user is authoritative;
    older ones linger until they expire or are consumed.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[OTPS_COLLECTION]

    async def create(
        self,
        user_id: ObjectId,
        code_hash: str,
        purpose: OtpPurpose,
        now: datetime,
        ttl: timedelta,
    ) -> ObjectId:
        doc = new_otp_document(
            user_id=user_id, code_hash=code_hash, purpose=purpose, now=now, ttl=ttl
        )
        result = await self.collection.insert_one(doc)
        return result.inserted_id

    async def latest_for_user(self, user_id: ObjectId) -> Optional[Dict[str, Any]]:
        # _id breaks ties between codes created in the same millisecond
        return await self.collection.find_one(
            {"user_id": user_id},
            sort=[("created_at", DESCENDING), ("_id", DESCENDING)],
        )

    async def record_failed_attempt(self, otp_id: ObjectId) -> int:
        """Increment the attempt counter and return the stored count."""
        record = await self.collection.find_one_and_update(
            {"_id": otp_id},
            {"$inc": {"attempts": 1}},
            return_document=ReturnDocument.AFTER,
        )
        # Already consumed by a concurrent verification
        if record is None:
            return 0
        return record["attempts"]

    async def delete_for_user(self, user_id: ObjectId) -> int:
        """Drop every code for the user. Idempotent."""
        result = await self.collection.delete_many({"user_id": user_id})
        return result.deleted_count
