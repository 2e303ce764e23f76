#!/usr/bin/env python3
"""
Insert the demo certificates when the collection is empty.

Same effect as GET /api/seed-check, without the API running.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pymongo.errors import PyMongoError

from app.config import settings
from app.db.session import create_indexes, mongodb
from app.services.certificate_service import CertificateStore


async def seed():
    print("🌱 Seeding demo certificates")
    print("=" * 60)

    try:
        await mongodb.client.admin.command('ping')
        print(f"✅ MongoDB connected ({settings.MONGODB_DATABASE})")
    except PyMongoError as e:
        print(f"❌ MongoDB connection failed: {e}")
        return 1

    await create_indexes(mongodb.db)
    store = CertificateStore(mongodb.db)
    if await store.seed_if_empty():
        print(f"✅ Inserted demo certificates ({await store.count()} total)")
    else:
        print("ℹ️  Certificates collection already has data, nothing to do")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(seed()))
    finally:
        mongodb.close()
