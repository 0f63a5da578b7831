"""
Admin User Bootstrap Script

This script seeds the first administrator account so the admin API can be
logged into on a fresh database.

Features:
- First-run seeding
- scrypt password hashing
- No-op when users already exist

Usage:
    python -m careadmin.scripts.create_admin_user --username admin --password <secret>

Dependencies:
- Motor for async DB
- argparse: CLI interface

Author: Care Admin Development Team
"""

import argparse
import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from careadmin.shared.auth import hash_password
from careadmin.shared.database import USERS, close_db, db

logger = logging.getLogger(__name__)


async def ensure_admin_user(
    database: AsyncIOMotorDatabase,
    username: str,
    password: str,
    name: str = "",
) -> Optional[str]:
    """
    Create the admin user when the users collection is empty.

    Args:
        database: Target database
        username: Login name
        password: Plain-text password, stored as an scrypt hash
        name: Display name

    Returns:
        Optional[str]: New user id, or None when users already exist
    """
    existing = await database[USERS].count_documents({})
    if existing:
        logger.info(f"Users collection already has {existing} records. No action taken.")
        return None

    result = await database[USERS].insert_one({
        "username": username,
        "password": hash_password(password),
        "name": name,
    })
    logger.info(f"Admin user {username!r} created")
    return str(result.inserted_id)


async def main():
    parser = argparse.ArgumentParser(description="Create the first admin user")
    parser.add_argument("--username", default="admin", help="Login name (default: admin)")
    parser.add_argument("--password", required=True, help="Password for the new user")
    parser.add_argument("--name", default="Admin User", help="Display name")
    args = parser.parse_args()

    try:
        await ensure_admin_user(db, args.username, args.password, args.name)
    finally:
        close_db()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
