#!/usr/bin/env python3
"""
Create an active ADMIN account.

Admins cannot self-register through the API; this is the only way in.

Usage:
    python scripts/create_admin.py --email admin@example.com --name "Ops" --password '...'
"""

import argparse
import asyncio
import getpass
import sys
from datetime import datetime
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pymongo.errors import PyMongoError

from app.config import settings
from app.core.exceptions import ConflictError
from app.core.security import hash_secret
from app.db.session import create_indexes, mongodb
from app.models.user import UserRole, UserStatus, new_user_document
from app.services.user_service import UserStore


async def create_admin(email: str, name: str, password: str) -> int:
    db = mongodb.db
    try:
        await mongodb.client.admin.command('ping')
        print("✅ MongoDB connected")
    except PyMongoError as e:
        print(f"❌ MongoDB connection failed: {e}")
        return 1

    await create_indexes(db)
    users = UserStore(db)

    now = datetime.utcnow()
    doc = new_user_document(
        name=name,
        email=email,
        password_hash=hash_secret(password, settings.BCRYPT_ROUNDS),
        role=UserRole.ADMIN,
        now=now,
    )
    doc["status"] = UserStatus.ACTIVE.value
    doc["is_verified"] = True

    try:
        user_id = await users.create(doc)
    except ConflictError:
        print(f"❌ An account with email {email} already exists")
        return 1

    print(f"✅ Admin {doc['email']} created (id {user_id})")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Create an active ADMIN account")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < 6:
        print("❌ Password must be at least 6 characters")
        sys.exit(1)

    try:
        sys.exit(asyncio.run(create_admin(args.email, args.name, password)))
    finally:
        mongodb.close()


if __name__ == "__main__":
    main()
