"""MongoDB client and database handle configuration."""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from app.config import settings
from app.models.certificate import CERTIFICATES_COLLECTION
from app.models.otp import OTPS_COLLECTION
from app.models.user import USERS_COLLECTION

logger = logging.getLogger(__name__)


class MongoDB:
    """
    Lazily-connected MongoDB handle shared by every request.

    The client is created on first use so importing the application never
    touches the network; motor keeps its own connection pool.
    """

    def __init__(self, uri: str, database: str, timeout_ms: int = 5000):
        self.uri = uri
        self.database_name = database
        self.timeout_ms = timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_ms,
                connectTimeoutMS=self.timeout_ms,
                maxPoolSize=20,
            )
        return self._client

    @property
    def db(self) -> AsyncIOMotorDatabase:
        return self.client[self.database_name]

    async def ping(self) -> bool:
        """Return True when the server answers a ping."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


async def create_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the indexes every collection relies on."""
    users = db[USERS_COLLECTION]
    await users.create_index("email", unique=True)
    await users.create_index("appar_id", unique=True, sparse=True)

    otps = db[OTPS_COLLECTION]
    await otps.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])
    # TTL: the server drops codes once expires_at has passed
    await otps.create_index("expires_at", expireAfterSeconds=0)

    certificates = db[CERTIFICATES_COLLECTION]
    await certificates.create_index("certificate_id", unique=True)
    await certificates.create_index("student_appar_id")


mongodb = MongoDB(
    settings.MONGODB_URI,
    settings.MONGODB_DATABASE,
    timeout_ms=settings.MONGODB_TIMEOUT_MS,
)


async def get_db() -> AsyncIOMotorDatabase:
    """Dependency to get the database handle."""
    return mongodb.db


async def init_db() -> None:
    """Create indexes at startup; a missing server is logged, not fatal."""
    try:
        await create_indexes(mongodb.db)
        logger.info(f"MongoDB indexes ready on {settings.MONGODB_DATABASE}")
    except PyMongoError as e:
        # The API still starts so /health can report the outage.
        logger.error(f"MongoDB unavailable during startup: {e}")


async def check_database() -> bool:
    """Dependency reporting whether the database answers a ping."""
    return await mongodb.ping()
